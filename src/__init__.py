"""VivaMente feed core."""
