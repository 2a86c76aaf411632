"""Todo list domain: commands, events, aggregate, read model and projector."""