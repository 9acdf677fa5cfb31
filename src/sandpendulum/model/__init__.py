"""
The MODEL layer contains pure data structures and the physics.
It has NO knowledge of the GUI (Qt).
It deals with the trajectory, the simulation parameters and their conversions.
"""
