import json
from unittest.mock import AsyncMock, patch

import pytest

from ledgerkit.cli import main
from ledgerkit.currency import Currency
from ledgerkit.fixture import Fixture
from ledgerkit.hmac_verifier import HmacVerifier
from ledgerkit.runner import SimulatorRunner


def test_fixture_list(capsys):
    assert main(["fixture", "list"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Available built-in fixtures:")
    assert "refunded" in out


def test_fixture_generate_to_stdout(capsys):
    assert main(["fixture", "generate", "--amount", "1234"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data == Fixture.successful_payment(1234, Currency.USD).to_dict()


def test_fixture_generate_to_file(tmp_path, capsys):
    target = tmp_path / "failed.json"
    assert main(["fixture", "generate", "-k", "failed", "-o", str(target)]) == 0
    assert capsys.readouterr().out.strip() == f"Fixture written to {target}"
    loaded = Fixture.from_json(target.read_text())
    assert loaded == Fixture.failed_payment(5000, Currency.USD)


def test_fixture_generate_unknown_kind(capsys):
    assert main(["fixture", "generate", "-k", "bogus"]) == 1
    assert "unknown fixture kind: bogus" in capsys.readouterr().err


def test_fixture_replay(tmp_path, capsys):
    fixture = Fixture.refunded_payment(7500, Currency.EUR)
    path = tmp_path / "fixture.json"
    path.write_text(fixture.to_json())
    assert main(["fixture", "replay", str(path)]) == 0
    out = capsys.readouterr().out
    assert out.rstrip().endswith(f"Replayed {len(fixture.events)} events")
    assert sum(1 for line in out.splitlines() if " | " in line) == len(fixture.events)


def test_fixture_replay_missing_file(tmp_path):
    assert main(["fixture", "replay", str(tmp_path / "absent.json")]) == 1


def test_simulate_default(capsys):
    with patch("asyncio.sleep", new_callable=AsyncMock):
        assert main(["simulate"]) == 0
    count = len(Fixture.successful_payment(5000, Currency.USD).events)
    assert f"Generated {count} events:" in capsys.readouterr().out


def test_simulate_all(capsys):
    with patch("asyncio.sleep", new_callable=AsyncMock):
        assert main(["simulate", "--all"]) == 0
    count = sum(len(f.events) for f in SimulatorRunner.builtin_fixtures())
    assert f"Generated {count} events:" in capsys.readouterr().out


def test_simulate_named_fixture(capsys):
    with patch("asyncio.sleep", new_callable=AsyncMock):
        assert main(["simulate", "--fixture", "failed_payment"]) == 0
    out = capsys.readouterr().out
    assert "[payment_failed]" in out


def test_simulate_unknown_fixture(capsys):
    assert main(["simulate", "-f", "nope"]) == 1
    assert "fixture not found: nope" in capsys.readouterr().err


def test_verify_valid(tmp_path, capsys):
    body = '{"type":"payment.captured"}'
    path = tmp_path / "payload.json"
    path.write_text(body)
    signature = HmacVerifier.hex(b"secret", "x-signature").sign_hex(body)
    assert main(["verify", "-p", str(path), "-s", "secret", "--signature", signature]) == 0
    assert capsys.readouterr().out.strip() == "Signature is VALID"


def test_verify_invalid(tmp_path, capsys):
    path = tmp_path / "payload.json"
    path.write_text("body")
    assert main(["verify", "-p", str(path), "-s", "secret", "--signature", "deadbeef"]) == 0
    assert capsys.readouterr().out.startswith("Signature is INVALID")


def test_verify_bad_encoding(tmp_path, capsys):
    path = tmp_path / "payload.json"
    path.write_text("body")
    assert main(["verify", "-p", str(path), "-s", "secret", "--signature", "zz"]) == 1
    assert "invalid signature encoding" in capsys.readouterr().err


def test_scaffold(capsys):
    assert main(["scaffold", "stripe"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Scaffolding new connector: stripe")
    assert "ledgerkit/stripe_connector.py" in out


def test_missing_command_exits():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code != 0