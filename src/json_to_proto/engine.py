from __future__ import annotations

from typing import Any, List, Optional, Tuple

from json_to_proto.errors import GenerationError, NestingTooDeepError
from json_to_proto.generator.proto_renderer import render_proto
from json_to_proto.inference.context import BuildContext
from json_to_proto.inference.synthesizer import root_message_name, synthesize_root
from json_to_proto.models import GenerateOptions, GenerationResult, ProtoFile
from json_to_proto.parser.document_parser import parse_documents


def infer_proto_file(
    documents: List[Any],
    options: Optional[GenerateOptions] = None,
) -> Tuple[ProtoFile, List[str]]:
    """Infer the descriptor tree for already-parsed documents.

    Raises GenerationError subclasses; see generate() for the non-raising API.
    """
    options = options or GenerateOptions()
    ctx = BuildContext(options)
    root = synthesize_root(documents, ctx)
    proto_file = ProtoFile(
        package=options.package_name.strip(),
        imports=ctx.sorted_imports(),
        messages=[root],
    )
    return proto_file, ctx.warnings


def generate_from_documents(
    documents: List[Any],
    options: Optional[GenerateOptions] = None,
) -> GenerationResult:
    options = options or GenerateOptions()
    try:
        proto_file, warnings = infer_proto_file(documents, options)
        proto_text = render_proto(proto_file)
    except GenerationError as e:
        return GenerationResult(error=e)
    except RecursionError:
        # max_depth set above what the interpreter stack can hold
        return GenerationResult(
            error=NestingTooDeepError(root_message_name(options.message_name), options.max_depth)
        )
    return GenerationResult(
        proto_text=proto_text,
        warnings=warnings,
        proto_file=proto_file,
    )


def generate(raw_input: str, options: Optional[GenerateOptions] = None) -> GenerationResult:
    """Infer a proto3 schema from one or more sample JSON documents.

    Never raises for bad input: failures are returned as a result whose
    `error` is the GenerationError and whose proto_text is empty.
    """
    try:
        documents = parse_documents(raw_input)
    except GenerationError as e:
        return GenerationResult(error=e)
    return generate_from_documents(documents, options)
