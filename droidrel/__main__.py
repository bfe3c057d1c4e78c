from droidrel.cli.app import main

main()
