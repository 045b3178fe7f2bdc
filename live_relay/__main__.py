from live_relay.runtime.serve import main

if __name__ == "__main__":
    main()
