"""Tuning parameters for stereo ground truth and run-time switches."""

# Cross-correlation matching used for the stereo ground truth. The images
# must be rectified; tune these per dataset.
TEMPLATE_X = 15  # template width to match
TEMPLATE_Y = 15  # template height to match
MARGIN = 2  # margin around the epipolar line
SEARCH_X = 300  # search window in columns
THRESHOLD = 0.99  # acceptance threshold for the correlation score

# Run the pipeline in parallel.
PARALLEL = True

# Run the rigid adaptation instead of the deformable one.
ORBSLAM = False