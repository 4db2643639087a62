"""Checks for devfile conventions that the schema itself does not enforce."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from .loader import MalformedDevfileError, load_devfile
from .spec import ComponentType, DevfileSpec, EndpointAttribute

KNOWN_COMPONENT_TYPES = {member.value for member in ComponentType}
KNOWN_ENDPOINT_ATTRIBUTES = {member.value for member in EndpointAttribute}


@dataclass
class Finding:
    ok: bool
    message: str


def _record(
    findings: List[Finding], condition: bool, success: str, failure: str
) -> None:
    findings.append(Finding(ok=condition, message=success if condition else failure))


def _duplicates(names: List[str]) -> List[str]:
    seen = set()
    dupes: List[str] = []
    for name in names:
        if name in seen and name not in dupes:
            dupes.append(name)
        seen.add(name)
    return dupes


def check_devfile(spec: DevfileSpec) -> List[Finding]:
    """
    Check a parsed devfile against its informal conventions.

    Checks:
    - Component types are recognized
    - Component aliases are unique
    - Command names are unique
    - Command actions reference declared component aliases
    - Endpoint attribute keys are recognized
    """
    findings: List[Finding] = []

    # 1. Component types
    unknown_types = sorted(
        {c.type for c in spec.components if c.type not in KNOWN_COMPONENT_TYPES}
    )
    _record(
        findings,
        not unknown_types,
        "Component types recognized",
        f"Unknown component types: {', '.join(repr(t) for t in unknown_types)}",
    )

    # 2. Aliases
    aliases = [c.alias for c in spec.components if c.alias]
    dup_aliases = _duplicates(aliases)
    _record(
        findings,
        not dup_aliases,
        "Component aliases unique",
        f"Duplicate component aliases: {', '.join(dup_aliases)}",
    )

    # 3. Command names
    dup_commands = _duplicates([cmd.name for cmd in spec.commands])
    _record(
        findings,
        not dup_commands,
        "Command names unique",
        f"Duplicate command names: {', '.join(dup_commands)}",
    )

    # 4. Action -> component references
    declared = set(aliases)
    dangling = []
    for cmd in spec.commands:
        for action in cmd.actions:
            if action.component is not None and action.component not in declared:
                dangling.append(f"{cmd.name} -> {action.component}")
    _record(
        findings,
        not dangling,
        "Command actions reference declared components",
        f"Command actions reference unknown components: {', '.join(dangling)}",
    )

    # 5. Endpoint attributes
    unknown_keys = []
    for component in spec.components:
        for endpoint in component.endpoints:
            for key in endpoint.attributes:
                if key not in KNOWN_ENDPOINT_ATTRIBUTES:
                    unknown_keys.append(f"{endpoint.name}.{key}")
    _record(
        findings,
        not unknown_keys,
        "Endpoint attributes recognized",
        f"Unknown endpoint attributes: {', '.join(unknown_keys)}",
    )

    return findings


def validate_devfile(path: Path) -> bool:
    """Load a devfile, print one line per check, and report overall success."""
    try:
        spec = load_devfile(path)
    except MalformedDevfileError as exc:
        print(f"✗ {exc}")
        print("\nDevfile validation failed.")
        return False

    print(f"✓ Devfile parsed from {path}")
    findings = check_devfile(spec)
    for finding in findings:
        symbol = "✓" if finding.ok else "✗"
        print(f"{symbol} {finding.message}")

    if all(finding.ok for finding in findings):
        print("\nDevfile validation passed.")
        return True

    print("\nDevfile validation failed.")
    return False
