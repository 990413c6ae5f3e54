from sdg_inspect.tui.app import main

main()
