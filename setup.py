"""Setup script for the commonprovider package."""

from setuptools import setup, find_packages

requirements = [
    "pydantic>=2.0",
    "PyYAML>=6.0",
    "tomli>=2.0",
]

setup(
    name="commonprovider",
    version="0.1.0",
    description="Configuration-driven provider loading with type aliasing and layered settings",
    long_description=(
        "commonprovider resolves the provider types declared in a configuration "
        "section, validates them against the provider capability and attaches "
        "global and per-provider settings."
    ),
    long_description_content_type="text/plain",
    author="commonprovider Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Libraries :: Application Frameworks",
    ],
    python_requires=">=3.9",
    keywords="provider, plugin, configuration, loader",
    extras_require={
        "dev": [
            "pytest>=7.3.1",
            "flake8>=6.1.0",
            "black>=23.7.0",
            "isort>=5.12.0",
            "mypy>=1.5.1",
        ],
    },
)
