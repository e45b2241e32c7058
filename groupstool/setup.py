from setuptools import setup, find_packages

setup(
    name="groupstool",
    version="0.1.0",
    description="UW Groups CLI (group membership lookup and management)",
    packages=find_packages(),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=["structlog"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "groupstool=groupstool.__main__:main",
        ]
    },
)
