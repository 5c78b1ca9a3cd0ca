"""HTTP listener for MBO hardware failure reports."""
