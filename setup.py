"""
Setup script for PDF Annotation Fixer.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="pdf-annotation-fixer",
    version="1.0.0",
    description="Recover PDF annotations lost from truncated page annotation lists",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PDF Annotation Fixer Contributors",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*", "apps", "apps.*"]),
    install_requires=[
        "pypdf>=4.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "web": [
            "fastapi>=0.100.0",
            "python-multipart>=0.0.6",
            "uvicorn>=0.20.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "fastapi>=0.100.0",
            "python-multipart>=0.0.6",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdf-annotation-fixer=pdf_annotation_fixer.cli:cli",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf annotations annots repair recover fix cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
