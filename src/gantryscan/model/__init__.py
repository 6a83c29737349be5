"""
The MODEL layer contains pure data structures and the machine kinematics.
It has NO knowledge of the GUI (Qt) or the Visualization (PyVista).
It deals with axis values, limits, poses and the demo scan path.
"""
