"""Echoes standard input back, numbered, until a blank line or end of input.

Returns the transcript as the program's resulting string.
"""

from hostfx import Break, Continue, attempt, get_line, loop, put_line


def step(state):
    count, transcript = state
    return attempt(get_line()).flat_map(lambda line: _echo(count, transcript, line))


def _echo(count, transcript, result):
    if result.is_err() or not result.unwrap():
        return put_line(f"read {count} line(s)").map(lambda _: Break(transcript))
    line = f"{count + 1}: {result.unwrap()}"
    return put_line(line).map(lambda _: Continue((count + 1, transcript + line + "\n")))


main = loop((0, ""), step)
