from cnsctl.cli import cli

cli()
