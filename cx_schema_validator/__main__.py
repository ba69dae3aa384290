"""Module entrypoint for `python -m cx_schema_validator`."""

from .cli.run_validate import main


if __name__ == "__main__":
    main()
