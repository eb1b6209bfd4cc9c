"""Core Protector - rotate a shield to deflect projectiles homing on the core."""
