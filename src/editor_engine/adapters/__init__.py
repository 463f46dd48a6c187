"""Host adapters wiring the engine into concrete UI toolkits."""
