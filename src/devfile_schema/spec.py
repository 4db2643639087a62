"""Typed schema for devfile documents.

A devfile describes a cloud development workspace in one structured document:
its metadata, the projects to import, the components that provide the
workspace features, and the commands that can run inside those components.

The models below only carry data. Python attribute names are snake_case and
the wire names (camelCase) are aliases, so documents round-trip unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional

from pydantic import (
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    StrictBool,
    StrictInt,
    ValidationInfo,
    field_validator,
    model_serializer,
)


class ComponentType(str, Enum):
    """Recognized values of ``ComponentSpec.type``."""

    CHE_EDITOR = "cheEditor"
    CHE_PLUGIN = "chePlugin"
    DOCKERIMAGE = "dockerimage"
    KUBERNETES = "kubernetes"
    OPENSHIFT = "openshift"


class EndpointAttribute(str, Enum):
    """Recognized keys of ``Endpoint.attributes``."""

    # whether the endpoint is available publicly or inside the workspace only
    PUBLIC = "public"
    # whether the endpoint is covered with authentication
    SECURE = "secure"
    # endpoint type, e.g. terminal or ide
    TYPE = "type"
    # protocol used by the backend application
    PROTOCOL = "protocol"


def _is_empty(value: Any) -> bool:
    if value is False or value == "":
        return True
    return isinstance(value, (list, dict)) and not value


class DevfileModel(BaseModel):
    """Base for all devfile records.

    Serialization drops fields holding ``None`` (absent optional values) and
    fields listed in ``OMIT_EMPTY`` when they hold their zero value. Every
    other field is always emitted, even when it is empty.

    On decode an explicit ``null`` stands for the field's zero value.
    """

    OMIT_EMPTY: ClassVar[FrozenSet[str]] = frozenset()

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(
                call_default_factory=True
            )
        return value

    @model_serializer(mode="wrap")
    def _omit_absent(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        for name, field in type(self).model_fields.items():
            for key in {name, field.alias or name}:
                if key not in data:
                    continue
                value = data[key]
                if value is None or (name in self.OMIT_EMPTY and _is_empty(value)):
                    del data[key]
        return data

    def to_dict(self) -> Dict[str, Any]:
        """Return the document form, keyed by wire names."""
        return self.model_dump(by_alias=True, mode="json")


class DevfileMeta(DevfileModel):
    OMIT_EMPTY = frozenset({"generate_name", "name"})

    generate_name: str = Field("", alias="generateName")
    name: str = ""


class DevfileAttributes(DevfileModel):
    """Workspace behaviour flags interpreted by the consumer."""

    OMIT_EMPTY = frozenset({"persist_volumes", "editor_free"})

    persist_volumes: StrictBool = Field(False, alias="persistVolumes")
    editor_free: StrictBool = Field(False, alias="editorFree")


class ProjectSourceSpec(DevfileModel):
    """Project source: type and location."""

    location: str = Field(
        "",
        description="Source location. A URL for git and github projects, "
        "or file:// for zip archives",
    )
    type: str = Field("", description="Source type, e.g. git, github, zip")


class ProjectSpec(DevfileModel):
    name: str = ""
    source: ProjectSourceSpec = Field(default_factory=ProjectSourceSpec)


class Endpoint(DevfileModel):
    """Network endpoint exposed by a dockerimage component.

    ``attributes`` accepts any string key. The keys in ``EndpointAttribute``
    are the ones consumers recognize.
    """

    OMIT_EMPTY = frozenset({"attributes"})

    attributes: Dict[str, str] = Field(default_factory=dict)
    name: str = ""
    port: StrictInt = 0

    @field_validator("attributes", mode="before")
    @classmethod
    def _plain_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {
                (key.value if isinstance(key, Enum) else key): val
                for key, val in value.items()
            }
        return value


class Env(DevfileModel):
    """Environment variable set in a dockerimage container."""

    name: str = ""
    value: str = ""


class Volume(DevfileModel):
    """Volume mounted into a component.

    Components mounting a volume with the same name share its files.
    """

    container_path: str = Field("", alias="containerPath")
    name: str = ""


class ComponentSpec(DevfileModel):
    """A workspace component.

    One flat record covers every component type. Which of the optional fields
    are meaningful depends on ``type``, but nothing here enforces that.
    """

    OMIT_EMPTY = frozenset(
        {"alias", "endpoints", "env", "volumes", "selector"}
    )

    # common to all types
    type: str = ""
    alias: str = Field("", description="Component name, unique per component set")

    # cheEditor and chePlugin
    id: Optional[str] = Field(None, description="Component FQN")

    # cheEditor, chePlugin, kubernetes and openshift
    reference: Optional[str] = Field(
        None, description="Location of the referenced file, e.g. a Kubernetes list"
    )

    # dockerimage
    image: Optional[str] = None
    memory_limit: Optional[str] = Field(
        None,
        alias="memoryLimit",
        description="Plain integer or fixed-point integer with one of the "
        "suffixes E, P, T, G, M, K or Ei, Pi, Ti, Gi, Mi, Ki",
    )
    mount_sources: Optional[StrictBool] = Field(
        None,
        alias="mountSources",
        description="Mount project sources into the component "
        "(path exposed as CHE_PROJECTS_ROOT)",
    )
    endpoints: List[Endpoint] = Field(default_factory=list)
    env: List[Env] = Field(default_factory=list)
    volumes: List[Volume] = Field(default_factory=list)
    command: Optional[List[str]] = Field(
        None, description="Overrides the image command; None keeps the image default"
    )
    args: Optional[List[str]] = Field(
        None, description="Arguments for the image or overridden command"
    )

    # kubernetes and openshift
    reference_content: Optional[str] = Field(
        None,
        alias="referenceContent",
        description="Inlined content of the file given in 'reference'",
    )
    selector: Dict[str, str] = Field(
        default_factory=dict,
        description="Picks only matching items from the referenced list",
    )

    @field_validator("type", mode="before")
    @classmethod
    def _plain_type(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    @property
    def component_type(self) -> Optional[ComponentType]:
        """Recognized type, or None when ``type`` is not a known value."""
        try:
            return ComponentType(self.type)
        except ValueError:
            return None


class CommandActionSpec(DevfileModel):
    """One executable step of a command."""

    command: Optional[str] = Field(None, description="Command line to run")
    component: Optional[str] = Field(
        None, description="Alias of the component the action runs in"
    )
    type: str = Field("", description="Action type, e.g. exec")
    workdir: Optional[str] = None
    reference: Optional[str] = None
    reference_content: Optional[str] = Field(None, alias="referenceContent")


class CommandSpec(DevfileModel):
    OMIT_EMPTY = frozenset({"actions", "attributes"})

    actions: List[CommandActionSpec] = Field(default_factory=list)
    attributes: Dict[str, str] = Field(default_factory=dict)
    name: str = Field("", description="Command name, unique per command set")


class DevfileSpec(DevfileModel):
    """Top-level devfile document."""

    OMIT_EMPTY = frozenset(
        {"api_version", "metadata", "attributes", "projects", "commands"}
    )

    api_version: str = Field("", alias="apiVersion")
    metadata: DevfileMeta = Field(default_factory=DevfileMeta)
    attributes: DevfileAttributes = Field(default_factory=DevfileAttributes)
    projects: List[ProjectSpec] = Field(default_factory=list)
    components: List[ComponentSpec] = Field(default_factory=list)
    commands: List[CommandSpec] = Field(default_factory=list)

    def get_component(self, alias: str) -> Optional[ComponentSpec]:
        for component in self.components:
            if component.alias == alias:
                return component
        return None

    def get_command(self, name: str) -> Optional[CommandSpec]:
        for command in self.commands:
            if command.name == name:
                return command
        return None


def example_devfile() -> DevfileSpec:
    """Handy sample used for tests and docs."""

    return DevfileSpec(
        api_version="1.0.0",
        metadata=DevfileMeta(name="nodejs-web-app"),
        attributes=DevfileAttributes(persist_volumes=True),
        projects=[
            ProjectSpec(
                name="web-nodejs-sample",
                source=ProjectSourceSpec(
                    type="git",
                    location="https://github.com/che-samples/web-nodejs-sample.git",
                ),
            )
        ],
        components=[
            ComponentSpec(
                type=ComponentType.CHE_PLUGIN,
                id="che-incubator/typescript/latest",
            ),
            ComponentSpec(
                type=ComponentType.DOCKERIMAGE,
                alias="nodejs",
                image="quay.io/eclipse/che-nodejs10-ubi:nightly",
                memory_limit="512Mi",
                mount_sources=True,
                endpoints=[
                    Endpoint(
                        name="nodejs",
                        port=3000,
                        attributes={EndpointAttribute.PUBLIC: "true"},
                    )
                ],
                env=[Env(name="NODE_ENV", value="development")],
                volumes=[Volume(name="npm-cache", container_path="/home/user/.npm")],
            ),
        ],
        commands=[
            CommandSpec(
                name="download dependencies",
                actions=[
                    CommandActionSpec(
                        type="exec",
                        component="nodejs",
                        command="npm install",
                        workdir="${CHE_PROJECTS_ROOT}/web-nodejs-sample/app",
                    )
                ],
            ),
            CommandSpec(
                name="run the web app",
                actions=[
                    CommandActionSpec(
                        type="exec",
                        component="nodejs",
                        command="nodemon app.js",
                        workdir="${CHE_PROJECTS_ROOT}/web-nodejs-sample/app",
                    )
                ],
            ),
        ],
    )


if __name__ == "__main__":
    import json

    print(json.dumps(example_devfile().to_dict(), indent=2))
