"""Command line interface for math_matrix."""

from __future__ import annotations

import argparse
import json
import sys

from .core.config import get_settings
from .core.errors import MatrixError, describe_error
from .core.logging import setup_logging
from .linalg import Matrix

_OPERATIONS = ("det", "cofactor", "transpose", "adjoint", "inverse")


def _parse_order(text: str) -> tuple[int, int]:
    try:
        rows, cols = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"order must look like RxC, got {text!r}")
    return rows, cols


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="math-matrix",
        description="Compute determinants, cofactors, adjugates and inverses of small dense matrices.",
    )
    parser.add_argument(
        "operation",
        choices=_OPERATIONS,
        help="Derivation to compute.",
    )
    parser.add_argument(
        "values",
        type=float,
        nargs="*",
        help="Matrix items in row by row order.",
    )
    parser.add_argument(
        "--order",
        type=_parse_order,
        help="Matrix order as RxC (defaults to a square arrangement of the values).",
    )
    parser.add_argument(
        "--position",
        type=int,
        nargs=2,
        metavar=("I", "J"),
        default=(1, 1),
        help="1-based position for the cofactor operation (default: 1 1).",
    )
    parser.add_argument(
        "--round",
        action="store_true",
        help="Round matrix results to the nearest integer.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit results as JSON.",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level.",
    )
    return parser


def _run(args: argparse.Namespace) -> float | Matrix:
    if args.order is None:
        matrix = Matrix.square_matrix(args.values)
    else:
        matrix = Matrix(args.values, args.order)

    if args.operation == "det":
        return matrix.determinant()
    if args.operation == "cofactor":
        return matrix.to_determinant().cofactor(*args.position)
    if args.operation == "transpose":
        result = matrix.transpose()
    elif args.operation == "adjoint":
        result = matrix.adjoint()
    else:
        result = matrix.inverse()

    if args.round:
        result.round_mut()
    return result


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = get_settings()
    if args.log_level:
        config = config.model_copy(update={"LOG_LEVEL": args.log_level})
    setup_logging(config)

    try:
        result = _run(args)
    except MatrixError as exc:
        print(json.dumps(describe_error(exc)), file=sys.stderr)
        return 1

    if isinstance(result, Matrix):
        if args.json:
            print(json.dumps({"order": list(result.order), "rows": result.to_python()}))
        else:
            print(result.to_string(), end="")
    elif args.json:
        print(json.dumps({"value": result}))
    else:
        print(result)

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
