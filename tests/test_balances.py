import json

import httpx
import pytest
import respx

from lamportkit.balances import Config, fetch_balances, get_balance, load_config, main

RPC_URL = "https://rpc.example.com/"


def _write_config(tmp_path, wallets, rpc_url=RPC_URL):
    path = tmp_path / "config.yaml"
    lines = [f"rpc_url: {rpc_url}", "wallets:"] + [f"  - {w}" for w in wallets]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_load_config_reads_fields(tmp_path):
    path = _write_config(tmp_path, ["WalletA", "WalletB"])
    config = load_config(path)
    assert config == Config(rpc_url=RPC_URL, wallets=["WalletA", "WalletB"])


def test_load_config_missing_rpc_url(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("wallets:\n  - WalletA\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_bad_wallets(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(f"rpc_url: {RPC_URL}\nwallets: 5\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


@pytest.mark.asyncio
async def test_get_balance_sends_rpc_request():
    with respx.mock:
        route = respx.post(RPC_URL).mock(
            return_value=httpx.Response(200, json={"result": {"value": 1234}})
        )
        async with httpx.AsyncClient() as client:
            balance = await get_balance(client, RPC_URL, "WalletA")
    assert balance == 1234
    sent = json.loads(route.calls.last.request.content)
    assert sent == {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "getBalance",
        "params": ["WalletA"],
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"error": {"code": -32602, "message": "invalid"}},
        {"result": {"value": -5}},
        {"result": {"value": "12"}},
        {"result": {"value": 1.5}},
        [1, 2, 3],
    ],
)
async def test_get_balance_defaults_to_zero(payload):
    with respx.mock:
        respx.post(RPC_URL).mock(return_value=httpx.Response(200, json=payload))
        async with httpx.AsyncClient() as client:
            balance = await get_balance(client, RPC_URL, "WalletA")
    assert balance == 0


@pytest.mark.asyncio
async def test_get_balance_invalid_json_raises():
    with respx.mock:
        respx.post(RPC_URL).mock(return_value=httpx.Response(200, text="not json"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(ValueError):
                await get_balance(client, RPC_URL, "WalletA")


@pytest.mark.asyncio
async def test_fetch_balances_keeps_order_and_errors():
    def respond(request):
        wallet = json.loads(request.content)["params"][0]
        if wallet == "Broken":
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={"result": {"value": len(wallet)}})

    config = Config(rpc_url=RPC_URL, wallets=["Alpha", "Broken", "Gamma12"])
    with respx.mock:
        respx.post(RPC_URL).mock(side_effect=respond)
        async with httpx.AsyncClient() as client:
            results = await fetch_balances(config, client)
    assert [wallet for wallet, _ in results] == ["Alpha", "Broken", "Gamma12"]
    assert results[0][1] == len("Alpha")
    assert isinstance(results[1][1], httpx.ConnectError)
    assert results[2][1] == len("Gamma12")


def test_main_prints_balances(tmp_path, capsys):
    path = _write_config(tmp_path, ["WalletA"])
    with respx.mock:
        respx.post(RPC_URL).mock(
            return_value=httpx.Response(200, json={"result": {"value": 42}})
        )
        code = main(["--config", str(path)])
    out = capsys.readouterr().out
    assert code == 0
    assert out == "WalletA => 42 lamports\n"


def test_main_reports_missing_config(tmp_path, capsys):
    code = main(["--config", str(tmp_path / "absent.yaml")])
    assert code == 1
    assert "Error" in capsys.readouterr().err