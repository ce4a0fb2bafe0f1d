from provisio.commands import cli

cli()
