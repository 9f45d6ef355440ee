from address_finder.cli.main import main_cli

main_cli()
