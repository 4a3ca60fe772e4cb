"""
View-state logic shared by the web pages: loading the dashboard and
playlist data and selecting a track for playback.
"""
