"""Status line components that each report one system value as text."""