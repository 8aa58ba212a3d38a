"""Redis client, SET options, hash and priority queue helpers."""