"""
Mutating operations on a project file.

Each operation checks its fingerprint first and returns False without
touching the file when the entry is already there. Otherwise it runs one
transaction that inserts every entry it needs (definitions before the
entries that reference them) and returns True.
"""

from pathlib import Path

from .document import read_document
from .entries import (
    SwiftPackage,
    file_reference_entry,
    group_entry,
    package_reference_entry,
    product_build_file_entry,
    product_dependency_entry,
    quote,
    reference,
    source_build_file_entry,
)
from .errors import StructuralError
from .guard import exists
from .identifiers import IdentifierGenerator
from .inserter import ensure_list_item, insert_into_section
from .project_finder import detect_project_name
from .sections import (
    Anchor,
    attribute_value,
    find_attribute,
    find_entry,
    find_entry_by_id,
    list_items,
    unquote,
)
from .transaction import apply

# Where to create a section that doesn't exist yet, in order of preference
PACKAGE_REFERENCE_ANCHORS = (
    Anchor("XCConfigurationList", "after"),
    Anchor("XCSwiftPackageProductDependency", "before"),
)
PRODUCT_DEPENDENCY_ANCHORS = (
    Anchor("XCRemoteSwiftPackageReference", "after"),
    Anchor("XCConfigurationList", "after"),
)
BUILD_FILE_ANCHORS = (
    Anchor("PBXFileReference", "before"),
    Anchor("PBXGroup", "before"),
)
FILE_REFERENCE_ANCHORS = (
    Anchor("PBXBuildFile", "after"),
    Anchor("PBXGroup", "before"),
)
GROUP_ANCHORS = (
    Anchor("PBXNativeTarget", "before"),
    Anchor("PBXProject", "before"),
)


def _has_isa(isa):
    return lambda document, entry: attribute_value(document, entry, "isa") == isa


def project_entry(document: str):
    entry = find_entry(document, "PBXProject", _has_isa("PBXProject"))
    if entry is None:
        raise StructuralError("Project has no PBXProject object", section="PBXProject")
    return entry


def target_entry(document: str, target_name: str):
    def named(doc, entry):
        value = attribute_value(doc, entry, "name")
        return value is not None and unquote(value) == target_name

    entry = find_entry(document, "PBXNativeTarget", named)
    if entry is None:
        raise StructuralError(f"Target {target_name} not found", section="PBXNativeTarget")
    return entry


def target_phase(document: str, target_name: str, isa: str):
    """The build phase of type `isa` listed in the target's buildPhases."""
    phases = find_attribute(document, target_entry(document, target_name), "buildPhases")
    if phases is None:
        return None

    phase_ids = set(list_items(document, phases))
    return find_entry(
        document,
        isa,
        lambda doc, entry: entry.identifier in phase_ids and _has_isa(isa)(doc, entry),
    )


def group_by_name(document: str, name: str):
    """A PBXGroup whose comment, name or path is `name`."""
    def matches(doc, entry):
        if entry.comment == name:
            return True
        for key in ("name", "path"):
            value = attribute_value(doc, entry, key)
            if value is not None and unquote(value) == name:
                return True
        return False

    return find_entry(document, "PBXGroup", matches)


def main_group(document: str):
    value = attribute_value(document, project_entry(document), "mainGroup")
    if value is None:
        return None
    return find_entry_by_id(document, "PBXGroup", value.split()[0])


def add_swift_package(project_file: Path, package: SwiftPackage, target_name: str | None = None) -> bool:
    """
    Register a remote Swift package and link its product into a target.

    Adds the package reference, the product dependency, the project's
    packageReferences item, the target's packageProductDependencies item
    and a Frameworks build file for the product.
    """
    project_file = Path(project_file)
    target_name = target_name or detect_project_name(project_file)

    if exists(read_document(project_file), package.fingerprint):
        print(f"  ✓ {package.name} package already exists in the project")
        return False

    def mutate(document: str) -> str:
        target_entry(document, target_name)

        ids = IdentifierGenerator(document)
        reference_id = ids.next()
        dependency_id = ids.next()

        document = insert_into_section(
            document,
            "XCRemoteSwiftPackageReference",
            package_reference_entry(reference_id, package),
            PACKAGE_REFERENCE_ANCHORS,
        )
        document = insert_into_section(
            document,
            "XCSwiftPackageProductDependency",
            product_dependency_entry(dependency_id, reference_id, package),
            PRODUCT_DEPENDENCY_ANCHORS,
        )
        document = ensure_list_item(
            document,
            project_entry(document),
            "packageReferences",
            reference(reference_id, package.reference_comment),
            after_keys=("mainGroup", "minimizedProjectReferenceProxies"),
        )
        document = ensure_list_item(
            document,
            target_entry(document, target_name),
            "packageProductDependencies",
            reference(dependency_id, package.product),
            after_keys=("name",),
        )

        if target_phase(document, target_name, "PBXFrameworksBuildPhase") is None:
            print(f"  ⚠ Target {target_name} has no Frameworks build phase, {package.product} is not linked")
            return document

        build_file_id = ids.next()
        document = insert_into_section(
            document,
            "PBXBuildFile",
            product_build_file_entry(build_file_id, dependency_id, package.product),
            BUILD_FILE_ANCHORS,
        )
        return ensure_list_item(
            document,
            target_phase(document, target_name, "PBXFrameworksBuildPhase"),
            "files",
            reference(build_file_id, f"{package.product} in Frameworks"),
        )

    print(f"  Adding {package.name} package to Xcode project...")
    apply(project_file, f"{package.name} package addition", mutate)
    print(f"  ✓ {package.name} package added successfully")
    return True


def _parent_group(document: str, parent_name: str | None, project_name: str):
    """The named group, else the group named after the project, else mainGroup."""
    group = group_by_name(document, parent_name) if parent_name else None
    if group is None:
        group = group_by_name(document, project_name)
    if group is None:
        group = main_group(document)
    if group is None:
        raise StructuralError("Project has no main group", section="PBXGroup")
    return group


def add_folder_group(project_file: Path, name: str, relative_path: str, parent_group: str | None = None) -> bool:
    """
    Add a group for a directory (path relative to the project root).

    The group is listed under `parent_group`, or under the group named after
    the project, or under the project's main group.
    """
    project_file = Path(project_file)
    project_name = detect_project_name(project_file)

    if exists(read_document(project_file), (f"/* {name} */ = {{", f"path = {quote(relative_path)};")):
        print(f"  ✓ {name} group already exists in the project")
        return False

    def mutate(document: str) -> str:
        parent_id = _parent_group(document, parent_group, project_name).identifier
        group_id = IdentifierGenerator(document).next()

        document = insert_into_section(document, "PBXGroup", group_entry(group_id, name, relative_path), GROUP_ANCHORS)
        return ensure_list_item(
            document,
            find_entry_by_id(document, "PBXGroup", parent_id),
            "children",
            reference(group_id, name),
        )

    apply(project_file, f"{name} group addition", mutate)
    print(f"  ✓ Added {name} group to Xcode project")
    return True


def add_source_file(project_file: Path, filename: str, group_name: str, target_name: str | None = None) -> bool:
    """Add a file to a group and to the target's Sources build phase."""
    project_file = Path(project_file)
    target_name = target_name or detect_project_name(project_file)

    if exists(read_document(project_file), (f"/* {filename} */", f"path = {quote(filename)};")):
        print(f"  ✓ {filename} already exists in the project")
        return False

    def mutate(document: str) -> str:
        group = group_by_name(document, group_name)
        if group is None:
            raise StructuralError(f"Group {group_name} not found", section="PBXGroup")
        if target_phase(document, target_name, "PBXSourcesBuildPhase") is None:
            raise StructuralError(f"Target {target_name} has no Sources build phase", section="PBXSourcesBuildPhase")

        ids = IdentifierGenerator(document)
        file_id = ids.next()
        build_file_id = ids.next()

        document = insert_into_section(
            document, "PBXFileReference", file_reference_entry(file_id, filename), FILE_REFERENCE_ANCHORS
        )
        document = insert_into_section(
            document, "PBXBuildFile", source_build_file_entry(build_file_id, file_id, filename), BUILD_FILE_ANCHORS
        )
        document = ensure_list_item(
            document,
            find_entry_by_id(document, "PBXGroup", group.identifier),
            "children",
            reference(file_id, filename),
        )
        return ensure_list_item(
            document,
            target_phase(document, target_name, "PBXSourcesBuildPhase"),
            "files",
            reference(build_file_id, f"{filename} in Sources"),
        )

    apply(project_file, f"{filename} addition", mutate)
    print(f"  ✓ Added {filename} to Xcode project")
    return True
