from mdbook_obsidian.cli import main

main()
