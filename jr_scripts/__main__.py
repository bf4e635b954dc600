from jr_scripts.cli import main

main()
