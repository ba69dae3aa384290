"""Module entrypoint for `python -m cx_schema_validator.cli`.

Delegates to the validator CLI implementation.
"""

from .run_validate import main


if __name__ == "__main__":
    main()
