[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "myftp"
version = "0.1.0"
description = "A small FTP server serving one directory to the Anonymous user"
requires-python = ">=3.10"
dependencies = []
keywords = ["ftp", "server", "anonymous", "file-transfer", "pasv", "port"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
myftp = "myftp.app:main"

[tool.hatch.build.targets.wheel]
packages = ["myftp"]

[tool.pytest.ini_options]
addopts = "-ra"
