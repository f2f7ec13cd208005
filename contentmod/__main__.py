from contentmod.cli.main import main

main()
