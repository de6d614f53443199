"""
commute_planner.api.routers

Router package.
"""

# Package marker.
