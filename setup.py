#!/usr/bin/env python3
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="s3-sigv4-checker",
    version="0.1.0",
    author="Pictet STO",
    description="Compute and verify AWS Signature Version 4 signatures of S3 requests",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["sigcli"],
    include_package_data=True,
    install_requires=[
        "click>=8.1.3",
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "boto3>=1.28.0",
        "botocore>=1.31.0",
        "tabulate>=0.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "s3sig=sigcli:cli",
        ],
    },
    python_requires=">=3.8",
)
