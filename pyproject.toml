[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iacguard"
version = "0.1.0"
description = "Building blocks for an infrastructure-as-code security scanner: platform detection, exit-code policy, output settings and a small command line"
requires-python = ">=3.11"
dependencies = [
    "pyyaml",
]
keywords = [
    "security",
    "infrastructure-as-code",
    "terraform",
    "kubernetes",
    "cloudformation",
    "dockerfile",
    "static-analysis",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
iacguard = "iacguard.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["iacguard"]

[tool.pytest.ini_options]
addopts = "-ra"
