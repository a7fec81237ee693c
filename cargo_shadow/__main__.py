"""Allow ``python -m cargo_shadow``."""

from cargo_shadow.pipeline import main

main()
