from cwwizard.cli import cli_main

cli_main()
