[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uncflow"
version = "2.0.0"
description = "Intel uncore performance monitoring: Skylake-SP register layouts, MSR access and CHA metric derivation"
requires-python = ">=3.10"
dependencies = []
keywords = ["intel", "uncore", "performance", "monitoring", "msr", "pmu", "skylake"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: System :: Hardware",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["uncflow"]

[tool.pytest.ini_options]
addopts = "-ra"
