from stage_prep.cli import main

main()
