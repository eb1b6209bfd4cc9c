"""Gap Hop - jump over spikes sliding along the ground."""
