from ie_assistant.cli import main

main()
