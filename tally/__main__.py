from tally.main import main

main()
