"""
merkle-allowlist command line

Commands:
    merkle-allowlist generate [dev|prod]            # Build tree, write proofs/<env>.json
    merkle-allowlist verify [dev|prod]              # Re-check every stored proof
    merkle-allowlist proof 0xADDR [dev|prod]        # Show the stored proof for an address
    merkle-allowlist check-root 0xCONTRACT [dev|prod]   # Compare with a deployed root
"""

import argparse
import logging
import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .chain import RootReader
from .config import ENVIRONMENTS, Settings, resolve_environment
from .exceptions import AllowlistError
from .proofs import find_proofs, generate, load_proof_document, verify_proof_document

logger = logging.getLogger(__name__)

console = Console()

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def cmd_generate(settings: Settings, args) -> int:
    run = generate(settings, args.environment)

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column(style="cyan")
    table.add_column(style="white")
    table.add_row("Environment", run.environment)
    table.add_row("Entries", str(run.entry_count))
    table.add_row("Root", run.root)
    table.add_row("Output", str(run.output_path))
    console.print(Panel(table, title="[bold]MERKLE ALLOWLIST[/bold]", border_style="green"))
    return EXIT_OK


def cmd_verify(settings: Settings, args) -> int:
    path = settings.output_path(args.environment)
    document = load_proof_document(path)
    failed = verify_proof_document(document)
    total = len(document["proofs"])

    if failed:
        console.print(f"[red]✗ {len(failed)} of {total} proofs failed against {document['root']}[/red]")
        for gravatar_hash in failed:
            console.print(f"  [red]✗[/red] {gravatar_hash}")
        return EXIT_FAILED

    console.print(f"[green]✓ All {total} proofs in {path} verify against {document['root']}[/green]")
    return EXIT_OK


def cmd_proof(settings: Settings, args) -> int:
    document = load_proof_document(settings.output_path(args.environment))
    records = find_proofs(document, args.address)

    if not records:
        console.print(f"[yellow]{args.address} is not on the {args.environment} allowlist[/yellow]")
        return EXIT_FAILED

    for record in records:
        table = Table(title=f"Gravatar hash {record.get('gravatarHash')}", box=box.ROUNDED)
        table.add_column("#", style="dim", justify="right")
        table.add_column("Sibling")
        for i, sibling in enumerate(record.get("proof") or []):
            table.add_row(str(i), str(sibling))
        console.print(table)
    console.print(f"Root: {document['root']}")
    return EXIT_OK


def cmd_check_root(settings: Settings, args) -> int:
    document = load_proof_document(settings.output_path(args.environment))
    reader = RootReader(settings.rpc_url)
    comparison = reader.compare_root(args.contract, document["root"], args.function)

    console.print(f"On-chain: {comparison.onchain}")
    console.print(f"Expected: {comparison.expected}")
    if comparison.matches:
        console.print("[green]✓ Roots match[/green]")
        return EXIT_OK
    console.print("[red]✗ Roots differ[/red]")
    return EXIT_FAILED


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="merkle-allowlist",
        description="Merkle allowlist generator for (Gravatar hash, address) pairs"
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('--allowlist', type=str, help='Allowlist JSON file (ALLOWLIST_PATH)')
    parser.add_argument('--proofs-dir', type=str, help='Output directory for proofs (PROOFS_DIR)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    sub = parser.add_subparsers(dest='command', required=True)

    def add_environment(p):
        p.add_argument('environment', nargs='?', default=None,
                       help=f"One of {', '.join(ENVIRONMENTS)}; anything but 'prod' means dev")

    p = sub.add_parser('generate', help='Build the tree and write proofs')
    add_environment(p)
    p.set_defaults(func=cmd_generate)

    p = sub.add_parser('verify', help='Verify every stored proof against its root')
    add_environment(p)
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser('proof', help='Show the stored proof for an address')
    p.add_argument('address', help='EVM address')
    add_environment(p)
    p.set_defaults(func=cmd_proof)

    p = sub.add_parser('check-root', help='Compare the generated root with a deployed contract')
    p.add_argument('contract', help='Contract address')
    add_environment(p)
    p.add_argument('--function', default='merkleRoot', help='bytes32 view returning the root')
    p.set_defaults(func=cmd_check_root)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.from_env().with_overrides(
        allowlist_path=args.allowlist,
        proofs_dir=args.proofs_dir,
    )

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level_value,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if args.environment is None:
        args.environment = settings.environment
    else:
        args.environment = resolve_environment(args.environment)

    try:
        return args.func(settings, args)
    except AllowlistError as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[bold red][!][/bold red] {escape(str(e))}")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
