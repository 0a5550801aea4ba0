from ppdcaps.cli import main

main()
