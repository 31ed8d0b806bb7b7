"""
请求 / 响应结构与校验
"""
