import unittest

from aura_studio.models import EditIntent, Language, RotationState, ViewpointInputs, ViewShiftMode
from aura_studio.prompts import NOVEL_VIEW_TEMPLATES, compose, get_template_set, viewpoint_phrase


class TestEditTemplates(unittest.TestCase):
    def test_background_replacement_guards_the_subject(self):
        prompt = compose(EditIntent.BACKGROUND_REPLACE, "a marble kitchen counter", Language.EN, resolution='2K')
        self.assertIn("Place the product in: a marble kitchen counter.", prompt)
        self.assertIn("Do not alter the product's shape, logo, or color", prompt)
        self.assertTrue(prompt.endswith("Realistic lighting, 2K."))

    def test_general_and_creative(self):
        general = compose(EditIntent.GENERAL_ENHANCE, "remove the dust.", 'en')
        self.assertEqual(
            general,
            "Professional image editing. remove the dust. "
            "Maintain the original subject's identity strictly. High fidelity, 1K.",
        )
        creative = compose(EditIntent.CREATIVE_RESTYLE, "ukiyo-e print", 'en', resolution='4K')
        self.assertEqual(creative, "Creative re-imagining. ukiyo-e print. Artistic style, masterpiece quality, 4K.")

    def test_language_follows_argument(self):
        prompt = compose(EditIntent.BACKGROUND_REPLACE, "海边", Language.ZH)
        self.assertTrue(prompt.startswith("产品摄影背景替换。将产品置于：海边。"))
        self.assertNotIn("Product photography", prompt)

    def test_empty_text_drops_the_slot(self):
        prompt = compose(EditIntent.GENERAL_ENHANCE, "  ", Language.EN)
        self.assertEqual(prompt, "Professional image editing. Maintain the original subject's identity strictly. "
                                 "High fidelity, 1K.")
        self.assertNotIn("..", prompt)


class TestViewShift(unittest.TestCase):
    def test_preset_with_empty_text_is_phrase_alone(self):
        viewpoint = ViewpointInputs(preset='left three-quarter view')
        prompt = compose(EditIntent.VIEW_SHIFT, "", Language.EN, viewpoint=viewpoint)
        self.assertEqual(prompt, viewpoint_phrase(viewpoint, Language.EN))
        self.assertEqual(prompt, "Change the camera viewpoint to left three-quarter view")
        self.assertFalse(prompt.startswith(('.', ' ', '。')))

    def test_preset_id_is_localized(self):
        prompt = compose(EditIntent.VIEW_SHIFT, None, Language.ZH, viewpoint=ViewpointInputs(preset='front_left'))
        self.assertEqual(prompt, "将视角改为左前45度视图")

    def test_unknown_preset_label_used_verbatim(self):
        prompt = compose(EditIntent.VIEW_SHIFT, "", 'en', viewpoint=ViewpointInputs(preset='over-the-shoulder view'))
        self.assertEqual(prompt, "Change the camera viewpoint to over-the-shoulder view")

    def test_rotation_camera_and_subject_prefixes(self):
        rotation = RotationState(pitch=0, yaw=90)
        camera = compose(EditIntent.VIEW_SHIFT, "show the zipper", Language.EN,
                         viewpoint=ViewpointInputs(rotation=rotation))
        self.assertEqual(camera, "show the zipper. Camera Path: Eye level, Right profile (X:0°, Y:90°)")
        subject = compose(EditIntent.VIEW_SHIFT, "", Language.ZH,
                          viewpoint=ViewpointInputs(rotation=rotation, mode=ViewShiftMode.SUBJECT))
        self.assertEqual(subject, "物体朝向: 平视, 右侧 (X:0°, Y:90°)")

    def test_preserve_pose_clause(self):
        viewpoint = ViewpointInputs(preset='back', preserve_pose=True)
        en = compose(EditIntent.VIEW_SHIFT, "", Language.EN, viewpoint=viewpoint)
        self.assertEqual(en, "Change the camera viewpoint to back view. "
                             "Keep the subject's pose and action exactly unchanged.")
        zh = compose(EditIntent.VIEW_SHIFT, "展示背面", Language.ZH, viewpoint=viewpoint)
        self.assertEqual(zh, "展示背面。将视角改为背面视图。保持主体的姿态和动作完全不变。")

    def test_novel_view_template_set(self):
        viewpoint = ViewpointInputs(preset='top')
        prompt = compose(EditIntent.VIEW_SHIFT, "", Language.EN, viewpoint=viewpoint,
                         templates=get_template_set('novel_view'))
        self.assertTrue(prompt.startswith("Change the camera viewpoint to top-down view. Novel View Synthesis"))
        self.assertTrue(prompt.endswith("changes accordingly."))
        self.assertIs(get_template_set('novel_view'), NOVEL_VIEW_TEMPLATES)

    def test_missing_viewpoint_raises(self):
        with self.assertRaises(ValueError):
            compose(EditIntent.VIEW_SHIFT, "", Language.EN)
        with self.assertRaises(ValueError):
            compose(EditIntent.VIEW_SHIFT, "", Language.EN, viewpoint=ViewpointInputs())
        with self.assertRaises(ValueError):
            get_template_set('unknown')


if __name__ == "__main__":
    unittest.main()
