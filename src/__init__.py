"""
Core package of the AssemblyInfo stamper.

Holds the reference resolver, the metadata rewrite engine, the run
contracts and the logging utilities.
"""

from config.version import PROJECT_VERSION, PYTHON_REQUIRES_SPECIFIER

__version__ = PROJECT_VERSION
__description__ = "Stamps version and attribution attributes into AssemblyInfo files"

__package_info__ = {
    "name": "asminfo-stamper",
    "version": __version__,
    "description": __description__,
    "license": "MIT",
    "python_requires": PYTHON_REQUIRES_SPECIFIER,
}

__all__ = ["__version__", "__description__", "__package_info__"]
