"""Setup for custom-network"""

from setuptools import find_packages, setup

# Runtime requirements.
aws_cdk_extras = [
    "aws-cdk-lib>=2.80.0",
    "constructs>=10.0.0",
    "jsii>=1.80.0",
]

install_requires: list[str] = [*aws_cdk_extras]

extras_require_test = [
    "flake8~=7.0",
    "black~=24.1",
    "pytest-cov~=4.1",
    "pytest~=8.0",
]

extras_require_dev = [
    *extras_require_test,
    "isort~=5.13",
    "nodeenv~=1.8",
    "pre-commit~=3.6",
    "pre-commit-hooks~=4.5",
]

extras_require = {
    "test": extras_require_test,
    "dev": extras_require_dev,
}


setup(
    name="custom-network",
    version="0.0.1",
    python_requires=">=3.9",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    package_data={
        ".": [
            "cdk.json",
        ],
    },
    install_requires=install_requires,
    extras_require=extras_require,
    include_package_data=True,
)
