from wicket.cli import main

main()
