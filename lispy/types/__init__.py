"""Runtime data types: values, environments and lambdas."""
