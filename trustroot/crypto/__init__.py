#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""Trustroot cryptographic operations module.

This module provides key handling, X.509 certificate management and the
certificate authority service used to populate keysets.
"""
