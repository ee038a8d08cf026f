"""Cache drivers, value encodings, an LRU cache and a user record cache."""