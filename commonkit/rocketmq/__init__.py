"""Message records and a logging adapter for message-queue code."""