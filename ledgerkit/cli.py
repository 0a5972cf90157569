"""The lk command: fixtures, simulation, signature checks and scaffolding."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from ledgerkit.currency import Currency
from ledgerkit.fixture import Fixture
from ledgerkit.hmac_verifier import HmacVerifier, HmacVerifierError
from ledgerkit.logsetup import init_logging
from ledgerkit.runner import SimulatorRunner
from ledgerkit.webhook import RawWebhook

_VERSION = "0.1.0"
_SIGNATURE_HEADER = "x-signature"

_GENERATORS = {
    "successful": Fixture.successful_payment,
    "failed": Fixture.failed_payment,
    "refunded": Fixture.refunded_payment,
}

_DESCRIPTIONS = {
    "successful": "Standard authorize + capture flow",
    "failed": "Payment that fails during authorization",
    "refunded": "Captured payment that is fully refunded",
}


def _fixture_list(args: argparse.Namespace) -> None:
    lines = ["Available built-in fixtures:"]
    lines.extend(
        f"  {kind:<12}- {_DESCRIPTIONS[kind]}" for kind in _GENERATORS
    )
    print("\n".join(lines))


def _fixture_generate(args: argparse.Namespace) -> None:
    generator = _GENERATORS.get(args.kind)
    if generator is None:
        raise ValueError(f"unknown fixture kind: {args.kind}")
    # The currency option is accepted, but fixtures are always generated in USD.
    text = generator(args.amount, Currency.USD).to_json()
    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        print(f"Fixture written to {args.output}")
    else:
        print(text)


def _fixture_replay(args: argparse.Namespace) -> None:
    fixture = Fixture.from_json(Path(args.path).read_text(encoding="utf-8"))
    events = fixture.to_canonical_events()
    for event in events:
        print(f"  {event.event_id} | {event.kind} | {event.amount}")
    print(f"\nReplayed {len(events)} events")


def _simulate(args: argparse.Namespace) -> None:
    runner = SimulatorRunner()
    if args.all:
        for fixture in SimulatorRunner.builtin_fixtures():
            runner.add_fixture(fixture)
    elif args.fixture is not None:
        found = next(
            (f for f in SimulatorRunner.builtin_fixtures() if f.name == args.fixture), None
        )
        if found is None:
            raise ValueError(f"fixture not found: {args.fixture}")
        runner.add_fixture(found)
    else:
        runner.add_fixture(Fixture.successful_payment(5000, Currency.USD))

    events = asyncio.run(runner.run_all())
    print(f"\nSimulation complete. Generated {len(events)} events:")
    for event in events:
        print(f"  [{event.kind}] {event.event_id} - {event.amount}")


def _verify(args: argparse.Namespace) -> None:
    body = Path(args.payload).read_text(encoding="utf-8")
    verifier = HmacVerifier.hex(args.secret.encode("utf-8"), _SIGNATURE_HEADER)
    result = verifier.verify(RawWebhook({_SIGNATURE_HEADER: args.signature}, body))
    if result.is_valid():
        print("Signature is VALID")
    else:
        print(f"Signature is INVALID: {result}")


def _scaffold(args: argparse.Namespace) -> None:
    name = args.name
    print(f"Scaffolding new connector: {name}")
    print()
    print("Create the following module:")
    print(f"  ledgerkit/{name}_connector.py")
    print()
    print("Implement these interfaces:")
    print("  - PaymentConnector (authorize, capture, refund, parse_webhook)")
    print("  - WebhookVerifier (verify)")
    print()
    print("See ledgerkit/mock_connector.py for a reference implementation.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lk", description="LedgerKit CLI - Payment infrastructure developer tools"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {_VERSION}")
    commands = parser.add_subparsers(dest="command", required=True)

    fixture = commands.add_parser("fixture", help="Generate and manage test fixtures")
    actions = fixture.add_subparsers(dest="action", required=True)
    actions.add_parser("list", help="List available fixtures").set_defaults(handler=_fixture_list)

    generate = actions.add_parser("generate", help="Generate a fixture file")
    generate.add_argument("-k", "--kind", default="successful",
                          help="Fixture type: successful, failed, refunded")
    generate.add_argument("-a", "--amount", type=int, default=5000, help="Amount in minor units")
    generate.add_argument("-c", "--currency", default="USD", help="Currency code")
    generate.add_argument("-o", "--output", help="Output file path")
    generate.set_defaults(handler=_fixture_generate)

    replay = actions.add_parser("replay", help="Replay a fixture file")
    replay.add_argument("path", help="Path to the fixture JSON file")
    replay.set_defaults(handler=_fixture_replay)

    simulate = commands.add_parser("simulate", help="Run the local payment simulator")
    simulate.add_argument("-f", "--fixture", help="Fixture name to simulate")
    simulate.add_argument("--all", action="store_true", help="Run all built-in fixtures")
    simulate.set_defaults(handler=_simulate)

    verify = commands.add_parser("verify", help="Verify a webhook payload signature")
    verify.add_argument("-p", "--payload", required=True, help="Path to the payload file")
    verify.add_argument("-s", "--secret", required=True, help="Signing secret")
    verify.add_argument("--signature", required=True, help="Signature to verify")
    verify.set_defaults(handler=_verify)

    scaffold = commands.add_parser("scaffold", help="Scaffold a new connector")
    scaffold.add_argument("name", help="Name of the connector")
    scaffold.set_defaults(handler=_scaffold)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the lk command; returns the exit status."""
    init_logging()
    args = _build_parser().parse_args(argv)
    try:
        args.handler(args)
    except (ValueError, OSError, HmacVerifierError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())