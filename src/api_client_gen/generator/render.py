"""Render plan: which template produces which file with which data.

The IR is turned into plain dict contexts shaped the way the template
bundle expects them, then rendered with pystache.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pystache

from api_client_gen.config import ProjectConfig
from api_client_gen.ir import NO_DESCRIPTION, EndpointGroup, EnumModel, Model, ObjectModel, Parameter
from api_client_gen.naming import upper_first
from api_client_gen.parser.base import Document

from .endpoints import EndpointExpander
from .models import ModelExpander
from .templates import TemplateBundle

ENUM_RAW_TYPE = "String"


@dataclass
class RenderTask:
    template: str
    output: Path  # relative to the output directory
    context: dict[str, Any]


def optional_type(type_name: str, optional: bool) -> str:
    return f"{type_name}?" if optional else type_name


def _init(entries: list[dict[str, Any]]) -> str:
    return ", ".join(f"{entry['name']}: {entry['type']}" for entry in entries)


def object_context(model: ObjectModel) -> dict[str, Any]:
    properties = []
    for prop in model.properties:
        entry = {"name": prop.name, "type": optional_type(prop.type, prop.optional)}
        if prop.enum is None:
            entry["description"] = prop.description
        properties.append(entry)

    return {
        "name": model.name,
        "description": model.description,
        "properties": properties,
        "init": _init(properties),
        "enums": [
            {
                "name": nested.name,
                "type": ENUM_RAW_TYPE,
                "description": nested.description or NO_DESCRIPTION,
                "cases": [case.model_dump() for case in nested.cases],
            }
            for nested in model.nested_enums
        ],
    }


def enum_context(model: EnumModel) -> dict[str, Any]:
    return {
        "name": model.name,
        "description": model.description,
        "type": ENUM_RAW_TYPE,
        "cases": [case.model_dump() for case in model.cases],
    }


def _parameter_entries(parameters: list[Parameter]) -> list[dict[str, str]]:
    return [{"name": p.name, "type": optional_type(p.type, p.optional)} for p in parameters]


def query_context(group: EndpointGroup) -> dict[str, Any]:
    queries = []
    for endpoint in group.endpoints:
        parameters = _parameter_entries(endpoint.parameters)
        query: dict[str, Any] = {
            "uppercased_type": endpoint.method.upper(),
            "lowercased_type": endpoint.method.lower(),
            "name": group.name,
            "description": endpoint.description,
            "content_type": endpoint.content_type,
            "parameters": parameters,
            "init": _init(parameters),
            "path": endpoint.path_template,
        }
        if endpoint.query_parameters:
            query["gquery"] = [{"name": p.name} for p in endpoint.query_parameters]
        if endpoint.response_type is not None:
            query["response_type"] = endpoint.response_type
        queries.append(query)
    return {"queries": queries}


def server_context(document: Document) -> dict[str, Any]:
    return {
        "title": document.info.title,
        "description": document.info.description,
        "servers": [
            {"name": server.name or f"server{index}", "url": server.url}
            for index, server in enumerate(document.servers)
        ],
    }


def build_render_plan(document: Document, config: ProjectConfig) -> list[RenderTask]:
    """Expand the document and list every file to render.

    All IR errors surface here, before anything is written.
    """
    models = ModelExpander(
        allow_dangling_refs=config.allow_dangling_refs,
        strict_properties=config.strict_properties,
    ).expand(document)
    groups = EndpointExpander(model_package=config.model_package).expand(document)

    title = upper_first(document.info.title)
    plan = [
        RenderTask("Package.swift", Path("Package.swift"), {"name": f"{config.name_prefix}{title}"}),
        RenderTask("README.md", Path("README.md"), {"name": title}),
        RenderTask("Server.swift", Path("Sources/Server.swift"), server_context(document)),
    ]
    plan.extend(_model_task(model) for model in models)
    plan.extend(
        RenderTask("Query.swift", Path("Sources/Queries") / f"{group.name}.swift", query_context(group))
        for group in groups
    )
    return plan


def _model_task(model: Model) -> RenderTask:
    output = Path("Sources/Models") / f"{model.name}.swift"
    if isinstance(model, ObjectModel):
        return RenderTask("Object.swift", output, object_context(model))
    return RenderTask("Enum.swift", output, enum_context(model))


def render_all(plan: list[RenderTask], bundle: TemplateBundle, output: Path) -> list[Path]:
    """Render every task into `output`, returning the written files."""
    # Generated sources are code, not HTML
    renderer = pystache.Renderer(escape=lambda text: text)
    written = []
    for task in plan:
        rendered = renderer.render(bundle.read(task.template), task.context)
        target = output / task.output
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rendered, encoding="utf-8")
        written.append(target)
    return written
