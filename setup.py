from setuptools import find_packages, setup

setup(
    name="hookchain",
    version="0.1.0",
    description="Priority-ordered filter and action hooks with mutation-safe reentrant dispatch",
    packages=find_packages(include=["hookchain", "hookchain.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2",
        "PyYAML>=6",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
)
