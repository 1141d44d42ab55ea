[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filecourier"
version = "0.1.0"
description = "Simple file transfer over TCP and UDP with MD5 integrity checks and transfer statistics"
requires-python = ">=3.10"
dependencies = []
keywords = ["file transfer", "tcp", "udp", "md5", "sockets", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
filecourier-tcp-client = "filecourier.tcp_client:main"
filecourier-tcp-server = "filecourier.tcp_server:main"
filecourier-udp-client = "filecourier.udp_client:main"
filecourier-udp-server = "filecourier.udp_server:main"
filecourier-gentext = "filecourier.gentext:main"

[tool.hatch.build.targets.wheel]
packages = ["filecourier"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
