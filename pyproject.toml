[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mariadbpp"
version = "0.1.0"
description = "Account, connection, date/time and time span helpers for MariaDB and MySQL servers"
requires-python = ">=3.10"
dependencies = ["pymysql"]
keywords = ["mariadb", "mysql", "database", "datetime", "connection"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mariadbpp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
