from sau.achievements.cli import main

main()
