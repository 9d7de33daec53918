from .transport import viscosity, thermal_conductivity
