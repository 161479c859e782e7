"""
Text of the pbxproj entries this tool adds, in the layout Xcode writes.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

# Values made only of these characters are written without quotes
UNQUOTED = re.compile(r'^[A-Za-z0-9_$/.]+$')

FILE_TYPES = {
    '.swift': 'sourcecode.swift',
    '.h': 'sourcecode.c.h',
    '.m': 'sourcecode.c.objc',
    '.json': 'text.json',
    '.plist': 'text.plist.xml',
    '.xcassets': 'folder.assetcatalog',
    '.storyboard': 'file.storyboard',
}


def quote(value: str) -> str:
    """Quote a value the way Xcode does when it isn't a bare word."""
    if UNQUOTED.match(value):
        return value
    escaped = value.replace('\\', '\\\\').replace('"', '\\"').replace('\n', '\\n')
    return f'"{escaped}"'


def reference(identifier: str, comment: str) -> str:
    """`ID /* comment */`, the form used in lists and references."""
    return f"{identifier} /* {comment} */"


@dataclass(frozen=True)
class SwiftPackage:
    """A remote Swift package and the product the app links from it."""

    name: str
    repository_url: str
    minimum_version: str
    product_name: str | None = None
    requirement_kind: str = "upToNextMajorVersion"

    @property
    def product(self) -> str:
        return self.product_name or self.name

    @property
    def reference_comment(self) -> str:
        return f'XCRemoteSwiftPackageReference "{self.name}"'

    @property
    def fingerprint(self) -> tuple[str, str]:
        # Match the URL without scheme or .git so hand-added packages count
        location = re.sub(r'^[a-z+]+://', '', self.repository_url)
        location = re.sub(r'\.git$', '', location)
        return (self.product, location)


def package_reference_entry(identifier: str, package: SwiftPackage) -> str:
    return (
        f"\t\t{reference(identifier, package.reference_comment)} = {{\n"
        f"\t\t\tisa = XCRemoteSwiftPackageReference;\n"
        f"\t\t\trepositoryURL = {quote(package.repository_url)};\n"
        f"\t\t\trequirement = {{\n"
        f"\t\t\t\tkind = {package.requirement_kind};\n"
        f"\t\t\t\tminimumVersion = {quote(package.minimum_version)};\n"
        f"\t\t\t}};\n"
        f"\t\t}};\n"
    )


def product_dependency_entry(identifier: str, package_reference: str, package: SwiftPackage) -> str:
    return (
        f"\t\t{reference(identifier, package.product)} = {{\n"
        f"\t\t\tisa = XCSwiftPackageProductDependency;\n"
        f"\t\t\tpackage = {reference(package_reference, package.reference_comment)};\n"
        f"\t\t\tproductName = {quote(package.product)};\n"
        f"\t\t}};\n"
    )


def product_build_file_entry(identifier: str, product_dependency: str, product: str) -> str:
    return (
        f"\t\t{reference(identifier, f'{product} in Frameworks')} = "
        f"{{isa = PBXBuildFile; productRef = {reference(product_dependency, product)}; }};\n"
    )


def source_build_file_entry(identifier: str, file_reference: str, filename: str) -> str:
    return (
        f"\t\t{reference(identifier, f'{filename} in Sources')} = "
        f"{{isa = PBXBuildFile; fileRef = {reference(file_reference, filename)}; }};\n"
    )


def file_reference_entry(identifier: str, filename: str) -> str:
    file_type = FILE_TYPES.get(PurePosixPath(filename).suffix, 'text')
    return (
        f"\t\t{reference(identifier, filename)} = "
        f"{{isa = PBXFileReference; lastKnownFileType = {file_type}; "
        f"path = {quote(filename)}; sourceTree = \"<group>\"; }};\n"
    )


def group_entry(identifier: str, name: str, path: str) -> str:
    """A group for a directory, located relative to the project root."""
    return (
        f"\t\t{reference(identifier, name)} = {{\n"
        f"\t\t\tisa = PBXGroup;\n"
        f"\t\t\tchildren = (\n"
        f"\t\t\t);\n"
        f"\t\t\tname = {quote(name)};\n"
        f"\t\t\tpath = {quote(path)};\n"
        f"\t\t\tsourceTree = SOURCE_ROOT;\n"
        f"\t\t}};\n"
    )
