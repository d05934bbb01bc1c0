"""Storage adapters: the local JSON file and the remote stores."""
