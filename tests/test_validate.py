"""Tests for devfile convention checks."""

from devfile_schema.spec import (
    CommandActionSpec,
    CommandSpec,
    ComponentSpec,
    DevfileSpec,
    Endpoint,
)
from devfile_schema.validate import check_devfile, validate_devfile


def _failures(spec):
    return [f.message for f in check_devfile(spec) if not f.ok]


class TestCheckDevfile:
    def test_example_passes(self, example):
        findings = check_devfile(example)
        assert len(findings) == 5
        assert all(f.ok for f in findings)

    def test_unknown_component_type(self):
        spec = DevfileSpec(components=[ComponentSpec(type="podman")])
        assert _failures(spec) == ["Unknown component types: 'podman'"]

    def test_duplicate_aliases(self):
        spec = DevfileSpec(
            components=[
                ComponentSpec(type="dockerimage", alias="app"),
                ComponentSpec(type="dockerimage", alias="app"),
                ComponentSpec(type="chePlugin"),
                ComponentSpec(type="chePlugin"),
            ]
        )
        assert _failures(spec) == ["Duplicate component aliases: app"]

    def test_duplicate_command_names(self):
        spec = DevfileSpec(commands=[CommandSpec(name="build"), CommandSpec(name="build")])
        assert _failures(spec) == ["Duplicate command names: build"]

    def test_dangling_component_reference(self):
        spec = DevfileSpec(
            components=[ComponentSpec(type="dockerimage", alias="app")],
            commands=[
                CommandSpec(
                    name="run",
                    actions=[
                        CommandActionSpec(type="exec", component="app"),
                        CommandActionSpec(type="exec", component="ghost"),
                        CommandActionSpec(type="exec"),
                    ],
                )
            ],
        )
        assert _failures(spec) == [
            "Command actions reference unknown components: run -> ghost"
        ]

    def test_unknown_endpoint_attribute(self):
        spec = DevfileSpec(
            components=[
                ComponentSpec(
                    type="dockerimage",
                    endpoints=[
                        Endpoint(name="web", port=80, attributes={"public": "true", "path": "/"})
                    ],
                )
            ]
        )
        assert _failures(spec) == ["Unknown endpoint attributes: web.path"]


class TestValidateDevfile:
    def test_passes(self, devfile_path, capsys):
        assert validate_devfile(devfile_path) is True
        out = capsys.readouterr().out
        assert "✓ Devfile parsed" in out
        assert "Devfile validation passed." in out

    def test_malformed(self, tmp_path, capsys):
        path = tmp_path / "devfile.yaml"
        path.write_text("components: 42\n", encoding="utf-8")
        assert validate_devfile(path) is False
        assert "Devfile validation failed." in capsys.readouterr().out

    def test_convention_failure(self, tmp_path, capsys):
        path = tmp_path / "devfile.yaml"
        path.write_text(
            "components:\n  - type: dockerimage\n    alias: a\n"
            "commands:\n  - name: x\n    actions:\n      - type: exec\n        component: b\n",
            encoding="utf-8",
        )
        assert validate_devfile(path) is False
        out = capsys.readouterr().out
        assert "✗ Command actions reference unknown components: x -> b" in out
