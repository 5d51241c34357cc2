"""InvestRisk: holding risk scoring and investor profile compatibility."""
