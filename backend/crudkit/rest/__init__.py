"""REST scaffolding — controller, actions, resource service, forms and router builder."""
