from wfiv.cli import cli

cli()
