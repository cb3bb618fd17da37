"""The platform's reference program: prints one greeting line."""

from hostfx import put_line

main = put_line("Hello, World!")
