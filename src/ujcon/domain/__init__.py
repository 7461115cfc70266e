"""Pure domain logic: amount parsing and currency conversion."""
