"""HTTP surface of the fee engine."""
