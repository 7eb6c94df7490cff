# Process-wide room state for socket handlers
from room_logic import RoomRegistry

# Global room registry instance
ROOM_STATE_SH = RoomRegistry()
