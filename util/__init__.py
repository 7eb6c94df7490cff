# Shared configuration and logging helpers for the SongSketch relay
