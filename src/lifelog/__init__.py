"""lifelog - a personal journaling CLI with GitHub Gist sync."""
