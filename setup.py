from setuptools import find_packages, setup

setup(
    name="rtlfix",
    version="0.3.0",
    description="Right-to-left text fix for Claude Desktop with integrity-safe patching and restore",
    packages=find_packages(include=["rtlfix", "rtlfix.*"]),
    include_package_data=True,
    package_data={
        "rtlfix.api.payload": ["templates/*.j2", "templates/*.css", "templates/*.js"],
    },
    python_requires=">=3.10",
    install_requires=[
        "typer<0.26",  # CLI; 0.26+ vendors its own click
        "click",  # CLI context and exceptions
        "pydantic>=2",  # Config, marker and output schemas
        "rich",  # Terminal formatting
        "pyyaml",  # YAML output
        "pygments",  # Highlighted output on a terminal
        "jinja2",  # Payload templates
    ],
    extras_require={
        "test": [
            "pytest>=7.0",  # Testing framework
            "pytest-timeout>=2.1",  # Test timeouts
            "pytest-xdist>=3.0",  # Parallel test execution
        ],
        "dev": [
            "pre-commit",  # Git hook management
            "ruff",  # Linting and formatting
            "mypy",  # Static type checking
            "types-PyYAML",  # Type stubs
            "types-setuptools",  # Type stubs
        ],
    },
    entry_points={
        "console_scripts": [
            "rtlfix=rtlfix.cli:main",
        ],
    },
)
