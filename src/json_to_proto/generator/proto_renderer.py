from __future__ import annotations

from pathlib import Path
from typing import List

from jinja2 import Environment, FileSystemLoader

from json_to_proto.models import ProtoFile


def _get_template_env() -> Environment:
    template_dir = Path(__file__).parent.parent / "templates"
    return Environment(
        loader=FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
    )


def _header_lines(proto_file: ProtoFile) -> List[str]:
    lines = []
    if proto_file.package:
        lines.append(f"package {proto_file.package};")
    for path in dict.fromkeys(proto_file.imports):
        lines.append(f'import "{path}";')
    return lines


def render_proto(proto_file: ProtoFile) -> str:
    """Render a descriptor tree as proto3 source text.

    Nested messages are indented two spaces per level below their parent and
    separated by one blank line.
    """
    env = _get_template_env()
    template = env.get_template("proto.j2")
    return template.render(
        header="\n".join(_header_lines(proto_file)),
        messages=proto_file.messages,
    )
