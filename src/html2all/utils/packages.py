"""Utility functions for checking installed packages."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/html2all/utils/packages.py
from __future__ import annotations

from typing import Optional, Tuple


def get_package_version(package_name: str) -> Optional[str]:
    """Get the installed version of a package.

    Parameters
    ----------
    package_name : str
        Distribution name of the package (e.g. "python-docx")

    Returns
    -------
    str or None
        Version string if package installed, None otherwise

    """
    from importlib import metadata

    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check if installed package meets version requirement.

    Parameters
    ----------
    package_name : str
        Distribution name of the package
    version_spec : str
        Version specification (e.g., ">=4.0.0")

    Returns
    -------
    tuple
        (meets_requirement, installed_version)

    """
    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None

    from packaging import version
    from packaging.specifiers import SpecifierSet

    spec = SpecifierSet(version_spec)
    return version.parse(installed_version) in spec, installed_version
