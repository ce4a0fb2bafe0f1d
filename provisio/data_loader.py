"""Catalog loading: JSON catalogs into validated item specs.

Catalogs are read from the user file (``$PROVISIO_CONFIG`` or
``~/.config/provisio/catalogs.json``) when it exists, otherwise from the
bundled ``data/catalogs.json``. Parsed catalogs are cached at module level
for the lifetime of the process; tests call ``clear_cache()`` between cases.
"""

from dataclasses import dataclass, field
from pathlib import Path

from provisio.config import ConfigError, is_command_safe, load_config
from provisio.errors import format_field_error
from provisio.execution import INSTALL_TIMEOUT
from provisio.orchestrator import (
    AutostartEntry,
    InstallableItem,
    RiskLevel,
    autostart_installer,
    check_command,
    command_exists,
    infer_risk_level,
    package_installed,
    path_exists,
    shell_installer,
    with_min_version,
)
from provisio.paths import get_autostart_dir, get_catalog_path, get_packaged_catalog_path

_DETECT_KINDS = ("commands", "packages", "paths", "check_command")

_catalogs_cache: "dict[str, Catalog] | None" = None


@dataclass(frozen=True)
class DetectSpec:
    commands: tuple[str, ...] = ()
    extra_dirs: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()
    paths: tuple[str, ...] = ()
    check_command: str | None = None
    version_command: str | None = None
    min_version: str | None = None


@dataclass(frozen=True)
class ItemSpec:
    name: str
    description: str
    detect: DetectSpec
    install: tuple[str, ...] = ()
    autostart: AutostartEntry | None = None
    depends_on: tuple[str, ...] = ()
    requires_confirmation: bool = True
    shell_init: str | None = None

    @property
    def risk_level(self) -> RiskLevel:
        return infer_risk_level(list(self.install))


@dataclass(frozen=True)
class ShellSection:
    lines: tuple[str, ...]
    when_command: str | None = None
    unless_command: str | None = None


@dataclass(frozen=True)
class ShellBlock:
    marker: str
    sections: tuple[ShellSection, ...] = ()


@dataclass
class Catalog:
    name: str
    description: str
    items: list[ItemSpec]
    shell_block: ShellBlock | None = None
    notes: list[str] = field(default_factory=list)

    def get_item(self, name: str) -> ItemSpec | None:
        return next((i for i in self.items if i.name == name), None)


def _require_str(data: dict, key: str, entity: str) -> str:
    if key not in data:
        raise ConfigError(f"{entity} missing required field: {key}")
    value = data[key]
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(format_field_error(entity, key, "must be a non-empty string"))
    return value


def _optional_str(data: dict, key: str, entity: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(format_field_error(entity, key, "must be a string or null"))
    return value


def _str_list(data: dict, key: str, entity: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ConfigError(format_field_error(entity, key, "must be an array"))
    for i, entry in enumerate(value):
        if not isinstance(entry, str) or not entry.strip():
            raise ConfigError(f"{entity} {key}[{i}] must be a non-empty string")
    return tuple(value)


def _parse_detect(data: dict, entity: str) -> DetectSpec:
    if not isinstance(data, dict):
        raise ConfigError(format_field_error(entity, "detect", "must be an object"))
    kinds = [k for k in _DETECT_KINDS if data.get(k)]
    if len(kinds) != 1:
        raise ConfigError(
            f"{entity} detect must set exactly one of: {', '.join(_DETECT_KINDS)}"
        )

    spec = DetectSpec(
        commands=_str_list(data, "commands", entity),
        extra_dirs=_str_list(data, "extra_dirs", entity),
        packages=_str_list(data, "packages", entity),
        paths=_str_list(data, "paths", entity),
        check_command=_optional_str(data, "check_command", entity),
        version_command=_optional_str(data, "version_command", entity),
        min_version=_optional_str(data, "min_version", entity),
    )
    if spec.min_version and not spec.version_command:
        raise ConfigError(f"{entity} min_version requires version_command")
    for command in (spec.check_command, spec.version_command):
        if command and not is_command_safe(command):
            raise ConfigError(f"{entity} command contains dangerous characters: {command[:50]}")
    return spec


def _parse_autostart(data: dict, entity: str) -> AutostartEntry:
    if not isinstance(data, dict):
        raise ConfigError(format_field_error(entity, "autostart", "must be an object"))
    return AutostartEntry(
        file_name=_require_str(data, "file_name", entity),
        name=_require_str(data, "name", entity),
        exec_path=_require_str(data, "exec", entity),
        comment=_optional_str(data, "comment", entity) or "",
    )


def _parse_item(data: dict, entity: str) -> ItemSpec:
    if not isinstance(data, dict):
        raise ConfigError(f"{entity} must be an object")
    name = _require_str(data, "name", entity)
    entity = f"Item '{name}'"

    install = _str_list(data, "install", entity)
    for command in install:
        if not is_command_safe(command):
            raise ConfigError(f"{entity} command contains dangerous characters: {command[:50]}")

    autostart = None
    if "autostart" in data:
        autostart = _parse_autostart(data["autostart"], entity)
    if bool(install) == bool(autostart):
        raise ConfigError(f"{entity} must define exactly one of 'install' or 'autostart'")

    if "detect" in data:
        detect = _parse_detect(data["detect"], entity)
    elif autostart:
        detect = DetectSpec()
    else:
        raise ConfigError(f"{entity} missing required field: detect")

    requires_confirmation = data.get("requires_confirmation", True)
    if not isinstance(requires_confirmation, bool):
        raise ConfigError(format_field_error(entity, "requires_confirmation", "must be a boolean"))

    return ItemSpec(
        name=name,
        description=_optional_str(data, "description", entity) or "",
        detect=detect,
        install=install,
        autostart=autostart,
        depends_on=_str_list(data, "depends_on", entity),
        requires_confirmation=requires_confirmation,
        shell_init=_optional_str(data, "shell_init", entity),
    )


def _parse_shell_block(data: dict, entity: str) -> ShellBlock:
    if not isinstance(data, dict):
        raise ConfigError(format_field_error(entity, "shell_block", "must be an object"))
    marker = _require_str(data, "marker", f"{entity} shell_block")
    sections = []
    for i, raw in enumerate(data.get("sections", [])):
        section_entity = f"{entity} shell_block.sections[{i}]"
        if not isinstance(raw, dict):
            raise ConfigError(f"{section_entity} must be an object")
        sections.append(
            ShellSection(
                lines=_str_list(raw, "lines", section_entity),
                when_command=_optional_str(raw, "when_command", section_entity),
                unless_command=_optional_str(raw, "unless_command", section_entity),
            )
        )
    return ShellBlock(marker=marker, sections=tuple(sections))


def parse_catalog(name: str, data: dict) -> Catalog:
    entity = f"Catalog '{name}'"
    if not isinstance(data, dict):
        raise ConfigError(f"{entity} must be an object")
    raw_items = data.get("items")
    if not isinstance(raw_items, list) or not raw_items:
        raise ConfigError(format_field_error(entity, "items", "must be a non-empty array"))

    items = []
    seen: set[str] = set()
    for i, raw in enumerate(raw_items):
        item = _parse_item(raw, f"{entity} items[{i}]")
        if item.name in seen:
            raise ConfigError(f"{entity} has duplicate item '{item.name}'")
        for dep in item.depends_on:
            if dep not in seen:
                raise ConfigError(
                    f"Item '{item.name}' depends on '{dep}', which must be listed before it"
                )
        seen.add(item.name)
        items.append(item)

    shell_block = None
    if data.get("shell_block") is not None:
        shell_block = _parse_shell_block(data["shell_block"], entity)

    return Catalog(
        name=name,
        description=_require_str(data, "description", entity),
        items=items,
        shell_block=shell_block,
        notes=list(_str_list(data, "notes", entity)),
    )


def parse_catalogs(raw: dict) -> dict[str, Catalog]:
    if "catalogs" not in raw:
        raise ConfigError("Invalid catalog file: missing top-level 'catalogs' key")
    if not isinstance(raw["catalogs"], dict):
        raise ConfigError("Invalid catalog file: 'catalogs' must be an object")
    return {name: parse_catalog(name, data) for name, data in raw["catalogs"].items()}


def get_catalog_source() -> Path:
    user_path = get_catalog_path()
    if user_path.exists():
        return user_path
    return get_packaged_catalog_path()


def get_catalogs() -> dict[str, Catalog]:
    """Load all catalogs, using the module cache after the first call.

    Raises:
        ConfigError: If the catalog file cannot be loaded or is invalid
    """
    global _catalogs_cache

    if _catalogs_cache is not None:
        return _catalogs_cache

    path = get_catalog_source()
    try:
        _catalogs_cache = parse_catalogs(load_config(path))
    except ConfigError as e:
        raise ConfigError(f"Failed to load catalog file {path}: {e}") from e
    return _catalogs_cache


def get_catalog(name: str) -> Catalog | None:
    return get_catalogs().get(name)


def clear_cache() -> None:
    global _catalogs_cache
    _catalogs_cache = None


def select_items(catalog: Catalog, only: list[str] | None = None) -> list[ItemSpec]:
    """Return the requested items plus their prerequisites, in catalog order.

    Raises:
        ConfigError: If a requested name is not in the catalog
    """
    if not only:
        return list(catalog.items)

    wanted: set[str] = set()
    pending = list(only)
    while pending:
        name = pending.pop()
        if name in wanted:
            continue
        spec = catalog.get_item(name)
        if spec is None:
            available = ", ".join(i.name for i in catalog.items)
            raise ConfigError(
                f"Unknown item '{name}' in catalog '{catalog.name}'. Available: {available}"
            )
        wanted.add(name)
        pending.extend(spec.depends_on)

    return [i for i in catalog.items if i.name in wanted]


def build_detector(spec: ItemSpec, autostart_dir: Path | None = None):
    detect = spec.detect
    if spec.autostart and not any(getattr(detect, k) for k in _DETECT_KINDS):
        target = (autostart_dir or get_autostart_dir()) / spec.autostart.file_name
        return path_exists(str(target))

    if detect.commands:
        detector = command_exists(*detect.commands, extra_dirs=detect.extra_dirs)
    elif detect.packages:
        detector = package_installed(*detect.packages)
    elif detect.paths:
        detector = path_exists(*detect.paths)
    else:
        detector = check_command(detect.check_command)

    if detect.min_version and detect.version_command:
        detector = with_min_version(detector, detect.version_command, detect.min_version)
    return detector


def build_item(
    spec: ItemSpec,
    timeout: int = INSTALL_TIMEOUT,
    debug: bool = False,
    autostart_dir: Path | None = None,
) -> InstallableItem:
    if spec.autostart:
        installer = autostart_installer(spec.autostart, autostart_dir or get_autostart_dir())
    else:
        installer = shell_installer(list(spec.install), timeout=timeout, debug=debug)

    return InstallableItem(
        name=spec.name,
        detect=build_detector(spec, autostart_dir),
        install=installer,
        requires_confirmation=spec.requires_confirmation,
        depends_on=spec.depends_on,
        description=spec.description,
    )


__all__ = [
    "DetectSpec",
    "ItemSpec",
    "ShellSection",
    "ShellBlock",
    "Catalog",
    "parse_catalog",
    "parse_catalogs",
    "get_catalog_source",
    "get_catalogs",
    "get_catalog",
    "clear_cache",
    "select_items",
    "build_detector",
    "build_item",
]
