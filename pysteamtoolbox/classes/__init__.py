from .classes import input_mode, phase, engine, SATURATION_PHASES, REGION_PHASE, class_dic
