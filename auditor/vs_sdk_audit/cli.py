# vs_sdk_audit/cli.py
from __future__ import annotations
import argparse

from .audit import _log, run_audit
from .discovery import list_instances
from .errors import ToolError
from .paths import VSWHERE_TIMEOUT
from .report import as_json, narrative, table
from .resolve import DEFAULT_TEMPLATE, KNOWN_SDKS, TableIdentifiers, TemplateIdentifiers
from .state import DEFAULT_STRATEGY, STRATEGIES

EXIT_OK = 0
EXIT_TOOL = 1
EXIT_MISSING = 3


def _label(s: str) -> str:
    s = s.strip()
    if not s:
        raise argparse.ArgumentTypeError("version label must not be empty")
    return s


def _print_results(args: argparse.Namespace, instances, results) -> None:
    if args.json:
        print(as_json(results))
    elif args.table:
        print(table(results))
    else:
        print(narrative(instances, results))


def _audit(args: argparse.Namespace, requested: list[str], strategy) -> int:
    try:
        instances, results = run_audit(
            requested, strategy,
            vswhere=args.vswhere, timeout=args.timeout,
            state_root=args.state_root, loader=args.loader,
            workers=args.workers,
        )
    except ToolError as e:
        _log(f"ERROR: {e}")
        return EXIT_TOOL

    _print_results(args, instances, results)
    if args.require_all and not all(r.present for r in results):
        return EXIT_MISSING
    return EXIT_OK


def _cmd_check(args: argparse.Namespace) -> int:
    return _audit(args, args.versions, TemplateIdentifiers(args.template))


def _cmd_known(args: argparse.Namespace) -> int:
    strategy = TableIdentifiers(KNOWN_SDKS)
    requested = args.versions or strategy.labels()
    return _audit(args, requested, strategy)


def _cmd_list(args: argparse.Namespace) -> int:
    try:
        instances = list_instances(args.vswhere, timeout=args.timeout)
    except ToolError as e:
        _log(f"ERROR: {e}")
        return EXIT_TOOL
    if not instances:
        print("No Visual Studio instances found.")
    for inst in instances:
        print(f"{inst.instance_id}  {inst.display_name} ({inst.version})  {inst.install_path}")
    return EXIT_OK


def _common(p: argparse.ArgumentParser, audit: bool = True) -> None:
    p.add_argument("--vswhere", type=str, help="Path to vswhere.exe")
    p.add_argument("--timeout", type=float, default=VSWHERE_TIMEOUT,
                   help="Seconds to wait for vswhere (default: %(default)s)")
    if not audit:
        return
    p.add_argument("--state-root", type=str, help="Folder holding <instance>/state.json")
    p.add_argument("--loader", choices=sorted(STRATEGIES), default=DEFAULT_STRATEGY,
                   help="State record decoder (default: %(default)s)")
    p.add_argument("--workers", type=int, default=1, help="Read instances in parallel")
    out = p.add_mutually_exclusive_group()
    out.add_argument("--table", action="store_true", help="Only list installed matches")
    out.add_argument("--json", action="store_true", help="Emit every result as JSON")
    p.add_argument("--require-all", action="store_true",
                   help="Exit 3 unless every version is installed in every instance")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="vs-sdk-audit",
                                description="Report which .NET Framework SDKs each Visual Studio instance has")
    sub = p.add_subparsers(dest="cmd", required=False)

    c = sub.add_parser("check", help="Check arbitrary version labels")
    c.add_argument("versions", nargs="+", type=_label, help="Version labels, e.g. 4.8 4.8.1")
    c.add_argument("--template", type=str, default=DEFAULT_TEMPLATE,
                   help="Component id pattern (default: %(default)s)")
    _common(c)
    c.set_defaults(func=_cmd_check)

    k = sub.add_parser("known", help="Check the built-in SDK table (default)")
    k.add_argument("versions", nargs="*", type=_label, help="Subset of the table to check")
    _common(k)
    k.set_defaults(func=_cmd_known)

    ls = sub.add_parser("list", help="List discovered instances")
    _common(ls, audit=False)
    ls.set_defaults(func=_cmd_list)

    return p


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    argv = list(argv or [])
    if not argv or (argv[0].startswith("-") and argv[0] not in ("-h", "--help")):
        # no sub-command: audit the known table
        argv = ["known", *argv]
    args = parser.parse_args(argv)
    if args.cmd == "check":
        try:
            TemplateIdentifiers(args.template)
        except ValueError as e:
            parser.error(str(e))
    return args.func(args)
