"""
对账单文档生成服务 - 后端核心模块

模块结构：
- config/     配置加载与规范解析
- models/     数据模型定义
- layout/     模板行布局（按位置聚类/槽位匹配）
- doc_gen/    分页与文档生成
- pipeline/   生成任务编排
"""

__version__ = "0.1.0"
