from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from json_to_proto.engine import generate
from json_to_proto.generator.descriptor_builder import build_descriptor_set
from json_to_proto.models import DEFAULT_MESSAGE_NAME, GenerateOptions


def _read_input(input_path: Optional[str]) -> str:
    if input_path is None or input_path == "-":
        return sys.stdin.read()
    return Path(input_path).read_text(encoding="utf-8")


def run(
    input_path: Optional[str],
    out_path: Optional[str],
    options: GenerateOptions,
    descriptor_out: Optional[str] = None,
) -> int:
    """Main pipeline: read, generate, write. Returns the process exit status."""
    try:
        raw = _read_input(input_path)
    except OSError as e:
        print(f"FATAL: cannot read {input_path}: {e}", file=sys.stderr)
        return 1

    result = generate(raw, options)
    if not result.ok:
        print(f"FATAL: {result.error}", file=sys.stderr)
        return 1

    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    if out_path is None:
        sys.stdout.write(result.proto_text)
    else:
        with open(out_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(result.proto_text)
        print(f"Generated: {out_path}")

    if descriptor_out is not None:
        file_name = Path(out_path).name if out_path else "generated.proto"
        fds = build_descriptor_set(result.proto_file, file_name)
        Path(descriptor_out).write_bytes(fds.SerializeToString())
        print(f"Generated: {descriptor_out}")

    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Infer a proto3 schema from sample JSON documents",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="JSON file with one or more sample documents (default: stdin)",
    )
    parser.add_argument("-o", "--out", help="Write the .proto file here instead of stdout")
    parser.add_argument("--package", default="", help="Proto package name")
    parser.add_argument(
        "--message-name",
        default=DEFAULT_MESSAGE_NAME,
        help=f"Name of the root message (default: {DEFAULT_MESSAGE_NAME})",
    )
    parser.add_argument(
        "--json-name",
        action="store_true",
        help="Emit json_name options for keys that differ from the proto field's JSON name",
    )
    parser.add_argument(
        "--merge-identical-messages",
        action="store_true",
        help="Collapse structurally identical sibling messages into one definition",
    )
    parser.add_argument(
        "--map-field",
        action="append",
        default=[],
        metavar="MESSAGE.FIELD",
        help="Render this object field as map<string, V> (repeatable)",
    )
    parser.add_argument(
        "--detect-maps",
        action="store_true",
        help="Render objects whose keys all look like data (ids, dates) as maps",
    )
    parser.add_argument(
        "--strict-root",
        action="store_true",
        help="Reject documents whose root is not a JSON object",
    )
    parser.add_argument("--max-depth", type=int, default=64, help="Maximum message nesting depth")
    parser.add_argument(
        "--descriptor-out",
        help="Also write a serialized FileDescriptorSet for the generated schema",
    )

    args = parser.parse_args()
    options = GenerateOptions(
        package_name=args.package,
        message_name=args.message_name,
        emit_json_name=args.json_name,
        merge_identical_messages=args.merge_identical_messages,
        map_fields=tuple(args.map_field),
        detect_maps=args.detect_maps,
        allow_scalar_root=not args.strict_root,
        max_depth=args.max_depth,
    )
    sys.exit(run(args.input, args.out, options, descriptor_out=args.descriptor_out))


if __name__ == "__main__":
    main()
