"""Greets the user named by $USER, falling back to a fixed name."""

from hostfx import EnvVarNotFoundError, do, env_var_utf8, err_line, put_line


@do
def main():
    try:
        name = yield env_var_utf8("USER")
    except EnvVarNotFoundError:
        yield err_line("USER is not set; greeting the world instead")
        name = "World"
    yield put_line(f"Hello, {name}!")
