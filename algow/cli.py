"""algow CLI — command-line driver for the type inference engine.

Commands:
  algow infer <file.json>     — Infer the principal type of a JSON AST document
  algow primitives            — List the primitive environment
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Optional

from algow import __version__
from algow.config import AlgowConfig, load_config
from algow.environment import EMPTY_CONTEXT, PRIMITIVES, Context
from algow.errors import InferenceError
from algow.inference import infer_program, run_type_inference
from algow.loader import load_context, load_file, scheme_to_dict, type_to_dict
from algow.types import Scheme, normalize_scheme

logger = logging.getLogger("algow")


def _resolve_config(args: argparse.Namespace) -> AlgowConfig:
    config = load_config(args.config)
    if getattr(args, "let_generalization", None):
        config.let_generalization = True
    if getattr(args, "no_prelude", False):
        config.prelude = False
    if getattr(args, "format", None):
        config.format = args.format
    return config


def _scheme_json(scheme: Scheme) -> dict:
    tidy = normalize_scheme(scheme)
    return {"scheme": scheme_to_dict(tidy), "pretty": str(tidy)}


def cmd_infer(args: argparse.Namespace, config: AlgowConfig) -> int:
    """Infer a single expression or a list of top-level definitions."""
    source_path = args.file
    if not os.path.exists(source_path):
        print(json.dumps({"error": f"File not found: {source_path}"}))
        return 2

    context: Context = PRIMITIVES if config.prelude else EMPTY_CONTEXT
    try:
        if args.context:
            context = {**context, **load_context(args.context)}
        document = load_file(source_path)
    except OSError as e:
        print(json.dumps({"error": f"Cannot read input: {e}"}))
        return 2
    except InferenceError as e:
        print(e.to_json())
        return 1

    if isinstance(document, list):
        try:
            schemes = infer_program(document, context, config)
        except InferenceError as e:
            print(e.to_json())
            return 1
        if config.format == "json":
            print(json.dumps({name: _scheme_json(s) for name, s in schemes.items()}, indent=2))
        else:
            for name, scheme in schemes.items():
                print(f"{name} : {normalize_scheme(scheme)}")
        return 0

    result = run_type_inference(document, context, config)
    logger.debug(result.summary)
    if not result.ok:
        print(result.error.to_json())
        return 1
    if config.format == "json":
        out = {"type": type_to_dict(result.type), **_scheme_json(result.scheme)}
        print(json.dumps(out, indent=2))
    else:
        print(result.scheme)
    return 0


def cmd_primitives(args: argparse.Namespace, config: AlgowConfig) -> int:
    """List the primitive environment."""
    if config.format == "json":
        print(json.dumps({name: scheme_to_dict(s) for name, s in PRIMITIVES.items()}, indent=2))
        return 0
    width = max(len(name) for name in PRIMITIVES)
    for name, scheme in PRIMITIVES.items():
        print(f"{name:<{width}} : {scheme}")
    return 0


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="algow",
        description="algow — Hindley-Milner type inference (Algorithm W)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Config file (default: search for .algowrc.yml)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # infer
    p_infer = subparsers.add_parser("infer", help="Infer the type of a JSON AST document")
    p_infer.add_argument("file", help="JSON expression or definitions document")
    p_infer.add_argument("--let-generalization", action="store_true", dest="let_generalization",
                         help="Generalize let-bound expressions (Damas-Milner)")
    p_infer.add_argument("--no-prelude", action="store_true", dest="no_prelude",
                         help="Start from the empty context instead of the primitives")
    p_infer.add_argument("--context", default=None,
                         help="JSON object of extra name -> scheme bindings")
    p_infer.add_argument("--format", choices=["pretty", "json"], default=None, help="Output format")
    p_infer.set_defaults(func=cmd_infer)

    # primitives
    p_prims = subparsers.add_parser("primitives", help="List the primitive environment")
    p_prims.add_argument("--format", choices=["pretty", "json"], default=None, help="Output format")
    p_prims.set_defaults(func=cmd_primitives)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = _resolve_config(args)
    except (OSError, ValueError) as e:
        print(json.dumps({"error": f"Invalid configuration: {e}"}))
        sys.exit(2)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    sys.exit(args.func(args, config))


if __name__ == "__main__":
    main()
