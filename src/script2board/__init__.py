# -*- coding: utf-8 -*-
"""script2board：一句创意 -> 口播文稿 + 可编辑分镜表。"""
