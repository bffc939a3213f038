import os
import sys
import argparse
import json
import logging

from dotenv import load_dotenv

from .config import InterpreterConfig
from .export import layers_to_binary_dict, layers_to_dict
from .interpreter import interpret_gcode_file


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(description="G-code Layer Interpreter CLI")
    parser.add_argument(
        "--log-level",
        default=os.getenv("GCODE_LAYERS_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Layers command
    layers_parser = subparsers.add_parser("layers", help="Interpret G-code file into layers")
    layers_parser.add_argument("file", help="Path to G-code file")
    layers_parser.add_argument("--binary", "-b", action="store_true", help="Float32 + Base64 segment buffers")
    layers_parser.add_argument("--output", "-o", help="Write JSON to this path instead of stdout", default=None)
    layers_parser.add_argument("--segment-length", type=float, default=None, help="Target arc sub-segment length")

    # Summarize command
    sum_parser = subparsers.add_parser("summarize", help="Summarize interpreted layers")
    sum_parser.add_argument("file", help="Path to G-code file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format='%(levelname)s: %(message)s',
        stream=sys.stderr,
    )

    if args.command == "layers":
        try:
            config = InterpreterConfig()
            if args.segment_length is not None:
                config = InterpreterConfig(arc_segment_length=args.segment_length)
            result = interpret_gcode_file(args.file, config=config)
            data = layers_to_binary_dict(result.layers) if args.binary else layers_to_dict(result.layers)
            data["diagnostics"] = [d.model_dump(mode="json") for d in result.diagnostics]

            if args.output:
                with open(args.output, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2)
                print(f"Saved to: {args.output}", file=sys.stderr)
            else:
                print(json.dumps(data, indent=2))
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    elif args.command == "summarize":
        try:
            result = interpret_gcode_file(args.file)
            print(json.dumps(result.summary.model_dump(by_alias=True), indent=2, ensure_ascii=False))
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

    else:
        parser.print_help()

if __name__ == "__main__":
    main()
