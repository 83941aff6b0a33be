from graph3d.qt.app import main

if __name__ == "__main__":
    main()
