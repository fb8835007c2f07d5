"""Heat and station rundown scheduling for rope-skipping competitions."""
