[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "contour-operator"
version = "0.1.0"
description = "Validation, status conditions and error aggregation for managing Contour and Gateway API resources."
requires-python = ">=3.10"
dependencies = []
keywords = ["contour", "envoy", "gateway-api", "operator", "kubernetes", "validation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["contour_operator"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
