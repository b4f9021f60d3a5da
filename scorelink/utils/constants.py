# Relay connection
DEFAULT_RELAY_HOST = "127.0.0.1"
DEFAULT_RELAY_PORT = 13000
DEFAULT_PLAYER_NUMBER = 1
VALID_PLAYER_NUMBERS = (1, 2)

# Conversation
HANDSHAKE_BUFFER_SIZE = 1024
END_MARKER = b"end"
TEXT_ENCODING = "ascii"

# Config file
ENV_FILE_NAME = ".scorelink"
ENV_DIR_NAME = ".vscode"
