"""CloudMarc calculators: GP, BDM commission, working days and the CV converter."""
