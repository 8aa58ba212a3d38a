"""General-purpose utilities: geohash, JSON comments, features, dates, randomness, concurrency."""