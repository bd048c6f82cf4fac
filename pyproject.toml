[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "freelist_lab"
version = "0.1.0"
description = "Two-way linked lists, list sorting experiments and a simulated free-list memory allocator"
requires-python = ">=3.10"
dependencies = []
keywords = ["linked-list", "sorting", "allocator", "free-list", "memory", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
freelist-lab4 = "freelist_lab.lab4:main"

[tool.hatch.build.targets.wheel]
packages = ["freelist_lab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
