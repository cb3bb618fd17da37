from pathlib import Path

from hostfx import (
    CapturingHost,
    EndOfInputError,
    GoodStatus,
    InMemoryHost,
    Metadata,
    NetworkError,
    Request,
    do,
    env_var_utf8,
    err_line,
    get_line,
    put_line,
    run,
    send_request,
    write_bytes,
    write_utf8,
)


class TestInMemoryHost:

    def test_seed_data_and_call_log(self) -> None:
        host = InMemoryHost.from_seed_data(stdin=["typed"], environ={"HOME": "/home/ada"})

        @do
        def program():
            home = yield env_var_utf8("HOME")
            line = yield get_line()
            yield put_line(f"{home}:{line}")
            yield err_line("done")

        run(program(), host).unwrap()

        assert host.stdout_text == "/home/ada:typed\n"
        assert host.stderr_text == "done\n"
        assert [name for name, _ in host.calls] == [
            "env_var_utf8",
            "get_line",
            "put_line",
            "err_line",
        ]

    def test_files_are_kept_in_memory(self, tmp_path: Path) -> None:
        host = InMemoryHost()
        text_path = tmp_path / "a.txt"

        @do
        def program():
            yield write_utf8(text_path, "first")
            yield write_utf8(text_path, "second")
            yield write_bytes("raw.bin", b"\x01")

        run(program(), host).unwrap()

        assert host.read_text(text_path) == "second"
        assert host.files[Path("raw.bin")] == b"\x01"
        assert not text_path.exists()

    def test_end_of_input(self) -> None:
        result = run(get_line(), InMemoryHost())
        assert isinstance(result.error, EndOfInputError)

    def test_responder(self) -> None:
        def responder(request: Request) -> GoodStatus:
            return GoodStatus(
                metadata=Metadata(url=request.url, status_code=200, status_text="OK"),
                body=b"hello",
            )

        host = InMemoryHost.from_seed_data(responder=responder)
        response = run(send_request(Request.get("https://example.test/")), host).unwrap()

        assert isinstance(response, GoodStatus)
        assert response.text() == "hello"

    def test_without_responder_requests_fail_as_network_errors(self) -> None:
        response = run(send_request(Request.get("https://example.test/")), InMemoryHost()).unwrap()

        assert isinstance(response, NetworkError)
        assert "https://example.test/" in response.message


class TestCapturingHost:

    def test_buffers_stdout_and_delegates_the_rest(self) -> None:
        inner = InMemoryHost.from_seed_data(stdin=["in"])
        host = CapturingHost(inner)

        @do
        def program():
            line = yield get_line()
            yield put_line(line)
            yield err_line("warning")

        run(program(), host).unwrap()

        assert host.captured == "in\n"
        assert inner.stdout == []
        assert inner.stderr == ["warning"]
