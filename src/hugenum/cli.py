"""
hugenum :: CLI

Usage:
    hugenum constants
    hugenum factorial [--upto 25]
    hugenum power <base> [--upto 64]
    hugenum eval <lhs> <op> <rhs>

Global options:
    --output {raw,human,json}   value rendering (default: human)
    --log-level LEVEL           DEBUG shows digit-shedding in mul_safe
    --json-logs                 structured log records on stderr

Examples:
    hugenum factorial --upto 30 --output raw
    hugenum power 2 --upto 100
    hugenum eval 6022e20 '<' 1416e29
"""

import argparse
import json
import sys
from typing import Callable, Dict, Optional, Sequence

from src.hugenum.contracts import dump_scaled_int
from src.hugenum.domain import ScaledInt, ScaledIntError
from src.hugenum.logging import get_logger, setup_logging
from src.hugenum.math.combinatorics import factorial_table, power_table

logger = get_logger(__name__)

# Named physical constants shown by `hugenum constants`
NAMED_CONSTANTS: Dict[str, float] = {
    "Avogadro constant": 6.022e23,
    "Planck temperature (K)": 1.416e32,
    "Speed of light (m/s)": 299792458.0,
    "Faraday constant (C/mol)": 96485.0,
    "Earth mass (kg)": 5.972e24,
    "Sun mass (kg)": 1.989e30,
}

BINARY_OPS: Dict[str, Callable[[ScaledInt, ScaledInt], object]] = {
    "+": lambda a, b: a.add(b),
    "-": lambda a, b: a.sub(b),
    "*": lambda a, b: a.mul_exact(b),
    "safe*": lambda a, b: a.mul_safe(b),
    "/": lambda a, b: a.div(b),
    "**": lambda a, b: a.pow(b),
    "<": lambda a, b: a < b,
    "<=": lambda a, b: a <= b,
    "==": lambda a, b: a == b,
    ">=": lambda a, b: a >= b,
    ">": lambda a, b: a > b,
}


def render(value: ScaledInt, output: str) -> str:
    """Render a value in the selected output form."""
    if output == "raw":
        return value.to_raw_string()
    if output == "json":
        return json.dumps(dump_scaled_int(value))
    return value.to_human_string()


def cmd_constants(args) -> int:
    """Print named constants, then align and order two of them."""
    values = {}
    for name, origin in NAMED_CONSTANTS.items():
        value = ScaledInt.from_float(origin)
        values[name] = value
        print(f"{name:<26} {render(value, args.output)}")

    na = values["Avogadro constant"]
    tp = values["Planck temperature (K)"]
    na2, tp2 = ScaledInt.align(na, tp)
    print()
    print(f"aligned Na = {na2.to_raw_string()}")
    print(f"aligned Tp = {tp2.to_raw_string()}")
    print(f"Na == Tp: {na == tp}")
    print(f"Tp == aligned Tp: {tp == tp2}")
    print(f"Na < Tp: {na < tp}")
    print(f"Na > Tp: {na > tp}")
    return 0


def cmd_factorial(args) -> int:
    """Print the factorial table 0..upto."""
    logger.info("factorial table up to %d", args.upto)
    for n, value in factorial_table(args.upto):
        print(f"{n:>4}! = {render(value, args.output)}")
    return 0


def cmd_power(args) -> int:
    """Print the power table base^0..base^upto."""
    base = ScaledInt.parse(args.base)
    logger.info("power table of %s up to %d", base, args.upto)
    for n, value in power_table(base, args.upto):
        print(f"{base.to_raw_string()}^{n} = {render(value, args.output)}")
    return 0


def cmd_eval(args) -> int:
    """Evaluate one binary operation on raw-form operands."""
    lhs = ScaledInt.parse(args.lhs)
    rhs = ScaledInt.parse(args.rhs)
    result = BINARY_OPS[args.op](lhs, rhs)
    if isinstance(result, ScaledInt):
        print(render(result, args.output))
    else:
        print(result)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hugenum",
        description="Approximate huge integers as fraction x 10^exponent",
    )
    parser.add_argument(
        "--output", default="human", choices=["raw", "human", "json"],
        help="Value rendering",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--json-logs", action="store_true", help="JSON log records")
    sub = parser.add_subparsers(dest="command")

    # constants
    p_constants = sub.add_parser("constants", help="Show named physical constants")
    p_constants.set_defaults(func=cmd_constants)

    # factorial
    p_factorial = sub.add_parser("factorial", help="Factorial table")
    p_factorial.add_argument("--upto", type=int, default=25)
    p_factorial.set_defaults(func=cmd_factorial)

    # power
    p_power = sub.add_parser("power", help="Power table")
    p_power.add_argument("base", help="Base in raw form (e.g. 2, 15e3)")
    p_power.add_argument("--upto", type=int, default=64)
    p_power.set_defaults(func=cmd_power)

    # eval
    p_eval = sub.add_parser("eval", help="Evaluate one binary operation")
    p_eval.add_argument("lhs", help="Left operand in raw form")
    p_eval.add_argument("op", choices=sorted(BINARY_OPS))
    p_eval.add_argument("rhs", help="Right operand in raw form")
    p_eval.set_defaults(func=cmd_eval)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(level=args.log_level, json_output=args.json_logs)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (ScaledIntError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
