"""
Locating the project file and the directories the bindings live in.
"""

from dataclasses import dataclass
from pathlib import Path


def find_project_file(start_dir: Path) -> Path:
    """Find `*.xcodeproj/project.pbxproj` in start_dir or the nearest parent."""
    start_dir = Path(start_dir).resolve()

    for directory in (start_dir, *start_dir.parents):
        for xcodeproj in sorted(directory.glob("*.xcodeproj")):
            candidate = xcodeproj / "project.pbxproj"
            if candidate.is_file():
                return candidate

    raise FileNotFoundError(f"No .xcodeproj found in {start_dir} or any parent directory")


def detect_project_name(project_file: Path) -> str:
    """The project name is the .xcodeproj bundle's name."""
    return Path(project_file).parent.stem


def project_root(project_file: Path) -> Path:
    """Directory containing the .xcodeproj bundle."""
    return Path(project_file).parent.parent


@dataclass(frozen=True)
class ProjectPaths:
    """Every directory the setup needs, built once per run."""

    project_file: Path
    source_path: Path
    view_path: Path
    layout_path: Path
    style_path: Path
    bindings_path: Path
    core_path: Path
    ui_path: Path
    base_path: Path

    @property
    def root(self) -> Path:
        return project_root(self.project_file)

    def directories(self) -> list[tuple[str, Path]]:
        """(group name, path) pairs; parents come before their children."""
        paths = [
            self.view_path,
            self.layout_path,
            self.style_path,
            self.bindings_path,
            self.core_path,
            self.ui_path,
            self.base_path,
        ]
        return [(path.name, path) for path in paths]

    def status(self) -> dict[Path, bool]:
        """Whether each directory exists right now."""
        return {path: path.is_dir() for _, path in self.directories()}

    def missing(self) -> list[tuple[str, Path]]:
        return [(name, path) for name, path in self.directories() if not path.is_dir()]

    def relative(self, path: Path) -> str:
        """Path relative to the project root, as written in the project file."""
        return path.relative_to(self.root).as_posix()


def setup_paths(config: dict, project_file: Path) -> ProjectPaths:
    """Resolve the configured directory names against the project root."""
    project_file = Path(project_file)
    source = project_root(project_file) / (config.get("source_directory") or detect_project_name(project_file))
    core = source / config["core_directory"]

    return ProjectPaths(
        project_file=project_file,
        source_path=source,
        view_path=source / config["view_directory"],
        layout_path=source / config["layouts_directory"],
        style_path=source / config["styles_directory"],
        bindings_path=source / config["bindings_directory"],
        core_path=core,
        ui_path=core / "UI",
        base_path=core / "Base",
    )
