"""Allow running aq as ``python -m antiquarantine``."""

from antiquarantine.cli.main import app

app(prog_name="aq")
