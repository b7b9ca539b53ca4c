from __future__ import annotations

from setuptools import find_packages, setup

from config.version import PROJECT_VERSION, PYTHON_REQUIRES_SPECIFIER

if __name__ == "__main__":
    setup(
        name="asminfo-stamper",
        version=PROJECT_VERSION,
        description="Stamps version and attribution attributes into AssemblyInfo files",
        python_requires=PYTHON_REQUIRES_SPECIFIER,
        packages=find_packages(include=["asminfo", "asminfo.*", "config", "src", "src.*"]),
        py_modules=["main", "run_stamper"],
        package_data={"config": ["VERSION"]},
        install_requires=[
            "loguru>=0.7",
            "pydantic>=2.5",
            "python-dotenv>=1.0",
            "tomli-w>=1.0",
            "tomli>=2.0; python_version < '3.11'",
        ],
        extras_require={
            "test": [
                "pytest>=7.4",
                "hypothesis>=6.90",
            ],
        },
        entry_points={
            "console_scripts": [
                "asminfo=run_stamper:main",
                "asminfo-config=asminfo.config_manager:main",
            ],
        },
    )
