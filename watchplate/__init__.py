# -*- coding: utf-8 -*-
"""WatchPlate companion sync service."""
