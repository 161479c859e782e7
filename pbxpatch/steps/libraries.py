"""
Swift packages the generated bindings depend on.
"""

from ..entries import SwiftPackage
from ..operations import add_swift_package
from .base import BaseSetup

SWIFT_JSON_UI = SwiftPackage(
    name="SwiftJsonUI",
    repository_url="https://github.com/Tai-Kimura/SwiftJsonUI",
    minimum_version="5.3.0",
)

SIMPLE_API_NETWORK = SwiftPackage(
    name="SimpleApiNetwork",
    repository_url="https://github.com/Tai-Kimura/SimpleApiNetwork",
    minimum_version="2.1.8",
)


class LibrarySetup(BaseSetup):
    """Add SwiftJsonUI, plus SimpleApiNetwork when use_network is set."""

    name = "libraries"

    def packages(self) -> list[SwiftPackage]:
        packages = [SWIFT_JSON_UI]
        if self.config.get("use_network"):
            packages.append(SIMPLE_API_NETWORK)
        for entry in self.config.get("packages") or []:
            packages.append(SwiftPackage(**entry))
        return packages

    def apply(self) -> bool:
        for package in self.packages():
            print(f"  Checking {package.name} package...")
            self.track(add_swift_package(self.project_file, package, self.target_name))
        return True
