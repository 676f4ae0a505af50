from ghe_lib import server


def test_flag_aliases_and_millisecond_timeout() -> None:
    args = server.build_parser().parse_args(
        ["--github-enterprise-url", "https://ghe.example.com/api/v3", "--timeout", "1500", "--transport", "http"]
    )

    overrides = server._overrides(args)

    assert overrides["base_url"] == "https://ghe.example.com/api/v3"
    assert overrides["timeout"] == 1.5
    assert overrides["transport"] == "http"
    assert overrides["debug"] is None


def test_bad_configuration_exits_with_status_2(capsys) -> None:
    assert server.main(["--port", "0"]) == 2
    assert "configuration error" in capsys.readouterr().err


def test_stdio_transport_runs_fastmcp_stdio(monkeypatch) -> None:
    called = {}

    async def fake_stdio(self) -> None:
        called["stdio"] = True

    monkeypatch.setattr(server.FastMCP, "run_stdio_async", fake_stdio)

    assert server.main(["--transport", "stdio"]) == 0
    assert called == {"stdio": True}


def test_port_bind_failure_exits_with_status_1(monkeypatch) -> None:
    def refuse(*args, **kwargs):
        raise server.PortBindError("No free port")

    monkeypatch.setattr(server, "bind_with_fallback", refuse)

    assert server.main(["--transport", "http", "--port", "3999"]) == 1
