"""
Package information package.
"""

from notificationparser.infrastructure.pkginfo.provider import (
    ManifestPackageInfo,
    PackageInfoProvider,
    StaticPackageInfo,
)

__all__ = ["ManifestPackageInfo", "PackageInfoProvider", "StaticPackageInfo"]
