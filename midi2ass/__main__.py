from midi2ass.cli import main

main()
